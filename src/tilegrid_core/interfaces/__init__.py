"""Interfaces module for tilegrid-core.

This module contains the abstractions shared by the source, layout and
cache packages without creating circular dependencies.
"""

# Content source interface
from .content_source_interface import ContentSourceInterface

# Cache interface
from .view_cache_interface import ViewCacheInterface

# Layout strategy interfaces
from .layout_strategy_interface import AppendStrategy, PrependStrategy

__all__ = [
    "ContentSourceInterface",
    "ViewCacheInterface",
    "AppendStrategy",
    "PrependStrategy",
]
