"""Utility functions for tilegrid-core."""

from .validation import validate_range, validate_display_hints
from .error_handling import handle_api_errors
from .performance_monitor import PerformanceMonitor
from .retry import fetch_with_backoff, next_delay

# Configuration utilities
from .config import (
    config_manager,
    ConfigManager,
    get_display_hints,
    get_source_config,
    get_layout_strategy_names,
    get_fetch_config,
    get_viewport_config,
    get_logging_config,
)

__all__ = [
    # From validation
    "validate_range",
    "validate_display_hints",
    # From error_handling
    "handle_api_errors",
    # From performance_monitor
    "PerformanceMonitor",
    # From retry
    "fetch_with_backoff",
    "next_delay",
    # From config
    "config_manager",
    "ConfigManager",
    "get_display_hints",
    "get_source_config",
    "get_layout_strategy_names",
    "get_fetch_config",
    "get_viewport_config",
    "get_logging_config",
]
