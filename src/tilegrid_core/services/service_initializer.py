"""Service initializer for the tilegrid-core server.

This module starts the services in dependency order (logging, grids, app)
and shuts them down in reverse.
"""

from typing import List, Optional
from omegaconf import DictConfig
from loguru import logger

from .base_service import BaseService, ServiceRegistry
from .app_service import get_app_service
from .grid_service import get_grid_service
from .logging_service import get_logging_service


class ServiceInitializer:
    """Service for initializing and managing all application services."""

    def __init__(self):
        """Initialize the service initializer."""
        self._services: List[BaseService] = []
        self._initialized = False

    async def initialize_all_services(self, cfg: DictConfig) -> bool:
        """Initialize all services in the correct order.

        Args:
            cfg: Configuration from Hydra

        Returns:
            True if all services were initialized successfully, False otherwise
        """
        try:
            logger.info("Starting service initialization")

            for service in (get_logging_service(), get_grid_service(), get_app_service()):
                if not await service.initialize(cfg):
                    logger.error(f"Failed to initialize {service.name} service")
                    await self.shutdown_all_services()
                    return False
                self._services.append(service)
                ServiceRegistry.register(service)

            self._initialized = True
            logger.info("All services initialized successfully")
            return True

        except Exception as e:
            logger.error(f"Error during service initialization: {e}")
            await self.shutdown_all_services()
            return False

    async def shutdown_all_services(self) -> bool:
        """Shutdown all services gracefully, in reverse start order.

        Returns:
            True if all services were shutdown successfully, False otherwise
        """
        logger.info("Shutting down all services")

        ok = True
        for service in reversed(self._services):
            try:
                await service.shutdown()
            except Exception as e:
                logger.error(f"Error shutting down service {service.name}: {e}")
                ok = False

        ServiceRegistry.clear()
        self._services.clear()
        self._initialized = False

        logger.info("All services shutdown")
        return ok

    def is_initialized(self) -> bool:
        return self._initialized


# Global service initializer instance
_service_initializer: Optional[ServiceInitializer] = None


def get_service_initializer() -> ServiceInitializer:
    """Get the global service initializer instance."""
    global _service_initializer
    if _service_initializer is None:
        _service_initializer = ServiceInitializer()
    return _service_initializer
