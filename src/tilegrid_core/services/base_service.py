"""Base service interface for tilegrid-core services.

Every long-lived service (logging, grids, the FastAPI app) shares this
initialize/shutdown lifecycle so the ServiceInitializer can start and stop
them in order.
"""

from abc import ABC, abstractmethod
from typing import Optional
from omegaconf import DictConfig
from loguru import logger


class BaseService(ABC):
    """Base class for all tilegrid-core services."""

    def __init__(self, name: str):
        """Initialize the base service.

        Args:
            name: Name of the service
        """
        self.name = name
        self._initialized = False
        self._config: Optional[DictConfig] = None

    @abstractmethod
    async def initialize(self, cfg: Optional[DictConfig] = None) -> bool:
        """Initialize the service.

        Args:
            cfg: Configuration for the service

        Returns:
            True if initialization was successful, False otherwise
        """
        pass

    @abstractmethod
    async def shutdown(self) -> bool:
        """Shutdown the service gracefully.

        Returns:
            True if shutdown was successful, False otherwise
        """
        pass

    def is_initialized(self) -> bool:
        return self._initialized

    def get_config(self) -> Optional[DictConfig]:
        return self._config

    def set_config(self, cfg: DictConfig) -> None:
        self._config = cfg
        logger.debug(f"{self.name} service configuration updated")

    def _mark_initialized(self) -> None:
        self._initialized = True
        logger.info(f"{self.name} service initialized successfully")

    def _mark_shutdown(self) -> None:
        self._initialized = False
        logger.info(f"{self.name} service shutdown successfully")


class ServiceRegistry:
    """Registry of running services, keyed by name."""

    _services: dict[str, BaseService] = {}

    @classmethod
    def register(cls, service: BaseService) -> None:
        cls._services[service.name] = service
        logger.debug(f"Registered service: {service.name}")

    @classmethod
    def get_all(cls) -> dict[str, BaseService]:
        return cls._services.copy()

    @classmethod
    def clear(cls) -> None:
        cls._services.clear()
        logger.debug("Cleared all registered services")
