"""Configuration management for tilegrid-core.

This module provides a simple configuration system. It stores Hydra's
DictConfig as a plain dictionary without dataclass definitions, and offers
helpers that read each configuration group with defaults.
"""

from loguru import logger
from typing import Dict, Any, Tuple
from omegaconf import OmegaConf
import dotenv

from ..models.config import (
    DEFAULT_APPEND_STRATEGY,
    DEFAULT_BUFFERED_PERCENTAGE,
    DEFAULT_BUSY_DELAY,
    DEFAULT_COLUMNS,
    DEFAULT_HORIZONTAL_SEPARATOR,
    DEFAULT_INITIAL_CHUNK,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_RETENTION,
    DEFAULT_LOG_ROTATION,
    DEFAULT_PREPEND_STRATEGY,
    DEFAULT_RETRY_INITIAL_DELAY,
    DEFAULT_RETRY_MAX_DELAY,
    DEFAULT_SOURCE_TYPE,
    DEFAULT_TILE_WIDTH,
    DEFAULT_VERTICAL_SEPARATOR,
)
from ..models.core import DisplayHints

dotenv.load_dotenv()


def _get_config() -> Dict[str, Any]:
    """Get the current configuration dictionary."""
    return config_manager.get_config() or {}


class ConfigManager:
    """Configuration manager for tilegrid-core.

    This class provides a singleton instance for accessing the configuration.
    It expects the configuration to be set from outside, typically from the
    Hydra-decorated main function.
    """

    _instance = None
    _cfg = None

    def __new__(cls):
        """Create a singleton instance."""
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize the configuration manager."""
        # Only initialize once
        if ConfigManager._cfg is None:
            ConfigManager._cfg = {}

    def set_config(self, cfg: Any):
        """Set the configuration.

        Args:
            cfg: Configuration object (DictConfig or dict)
        """
        if OmegaConf.is_config(cfg):
            ConfigManager._cfg = OmegaConf.to_container(cfg, resolve=True)
        else:
            ConfigManager._cfg = dict(cfg or {})

        logger.info("Configuration set successfully")

    def get_config(self) -> Dict[str, Any]:
        """Get the configuration dictionary."""
        return ConfigManager._cfg

    def reset(self) -> None:
        """Drop the current configuration."""
        ConfigManager._cfg = {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.get_config()


# Helper functions for accessing configuration values

def get_display_hints() -> DisplayHints:
    """Get the default display hints from configuration.

    Returns:
        DisplayHints built from the ``display`` group
    """
    display = _get_config().get("display") or {}
    return DisplayHints(
        tile_width_pixels=int(display.get("tile_width", DEFAULT_TILE_WIDTH)),
        horizontal_separator_pixels=int(
            display.get("horizontal_separator", DEFAULT_HORIZONTAL_SEPARATOR)),
        vertical_separator_pixels=int(
            display.get("vertical_separator", DEFAULT_VERTICAL_SEPARATOR)),
        number_of_columns=int(display.get("columns", DEFAULT_COLUMNS)),
    )


def get_source_config() -> Dict[str, Any]:
    """Get the ``source`` configuration group."""
    source = dict(_get_config().get("source") or {})
    source.setdefault("type", DEFAULT_SOURCE_TYPE)
    return source


def get_layout_strategy_names() -> Tuple[str, str]:
    """Get the configured (append, prepend) layout strategy names."""
    layout = _get_config().get("layout") or {}
    return (
        layout.get("append", DEFAULT_APPEND_STRATEGY),
        layout.get("prepend", DEFAULT_PREPEND_STRATEGY),
    )


def get_fetch_config() -> Dict[str, float]:
    """Get the busy delay and client retry delays."""
    fetch = _get_config().get("fetch") or {}
    return {
        "busy_delay": float(fetch.get("busy_delay", DEFAULT_BUSY_DELAY)),
        "retry_initial_delay": float(fetch.get("retry_initial_delay", DEFAULT_RETRY_INITIAL_DELAY)),
        "retry_max_delay": float(fetch.get("retry_max_delay", DEFAULT_RETRY_MAX_DELAY)),
    }


def get_viewport_config() -> Dict[str, Any]:
    """Get the viewport loading settings."""
    viewport = _get_config().get("viewport") or {}
    return {
        "initial_chunk": int(viewport.get("initial_chunk", DEFAULT_INITIAL_CHUNK)),
        "buffered_percentage": float(
            viewport.get("buffered_percentage", DEFAULT_BUFFERED_PERCENTAGE)),
    }


def get_logging_config() -> Dict[str, Any]:
    """Get the logging settings.

    The level is ``logging.level`` when set, otherwise DEBUG under
    ``server.debug`` and INFO without it. An empty ``logging.file`` turns the
    file sink off.
    """
    cfg = _get_config()
    logging_cfg = cfg.get("logging") or {}
    debug = bool((cfg.get("server") or {}).get("debug", False))
    return {
        "level": str(logging_cfg.get("level") or ("DEBUG" if debug else "INFO")).upper(),
        "console": bool(logging_cfg.get("console", True)),
        "dir": logging_cfg.get("dir", DEFAULT_LOG_DIR),
        "file": logging_cfg.get("file", DEFAULT_LOG_FILE),
        "rotation": logging_cfg.get("rotation", DEFAULT_LOG_ROTATION),
        "retention": logging_cfg.get("retention", DEFAULT_LOG_RETENTION),
    }


# Create a singleton instance of the configuration manager
config_manager = ConfigManager()
