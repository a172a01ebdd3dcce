"""Logging service for the tilegrid-core server.

Installs the loguru sinks described by the ``logging`` configuration group:
a colorized console sink and a rotating file sink. Only sinks added here are
ever removed, so re-initializing swaps them instead of stacking duplicates.
"""

import os
import sys
from typing import Any, Dict, List, Optional
from omegaconf import DictConfig
from loguru import logger

from .base_service import BaseService
from ..utils.config import config_manager, get_logging_config

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

_default_sink_removed = False


def _remove_default_sink() -> None:
    """Drop loguru's built-in stderr sink once per process."""
    global _default_sink_removed
    if not _default_sink_removed:
        logger.remove(0)
        _default_sink_removed = True


class LoggingService(BaseService):
    """Service owning the process's loguru sinks."""

    def __init__(self):
        super().__init__("logging")
        self._handler_ids: List[int] = []
        self.log_path: Optional[str] = None

    async def initialize(self, cfg: Optional[DictConfig] = None) -> bool:
        """Install sinks from configuration.

        Args:
            cfg: Configuration for the service

        Returns:
            True if the sinks were installed, False otherwise
        """
        try:
            if cfg is not None:
                self.set_config(cfg)
                if not config_manager.get_config():
                    config_manager.set_config(cfg)

            settings = get_logging_config()
            self._remove_sinks()
            _remove_default_sink()
            self._add_sinks(settings)

            self._mark_initialized()
            logger.info(
                f"Logging configured: level={settings['level']}, "
                f"file={self.log_path or 'disabled'}")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize logging service: {e}")
            return False

    async def shutdown(self) -> bool:
        """Remove the sinks this service added."""
        self._remove_sinks()
        self._mark_shutdown()
        return True

    def _add_sinks(self, settings: Dict[str, Any]) -> None:
        level = settings["level"]
        if settings["console"]:
            self._handler_ids.append(
                logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=True))

        if settings["file"]:
            os.makedirs(settings["dir"], exist_ok=True)
            self.log_path = os.path.join(settings["dir"], settings["file"])
            self._handler_ids.append(logger.add(
                self.log_path,
                level=level,
                format=FILE_FORMAT,
                rotation=settings["rotation"],
                retention=settings["retention"],
                backtrace=True,
                diagnose=True,
            ))

    def _remove_sinks(self) -> None:
        for handler_id in self._handler_ids:
            logger.remove(handler_id)
        self._handler_ids = []
        self.log_path = None

    @property
    def handler_count(self) -> int:
        return len(self._handler_ids)


# Global logging service instance
_logging_service: Optional[LoggingService] = None


def get_logging_service() -> LoggingService:
    """Get the global logging service instance."""
    global _logging_service
    if _logging_service is None:
        _logging_service = LoggingService()
    return _logging_service
