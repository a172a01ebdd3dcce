"""Services for tilegrid-core."""

from .base_service import BaseService, ServiceRegistry
from .fetch_coordinator import FetchCoordinator
from .grid_service import GridService, get_grid_service
from .logging_service import LoggingService, get_logging_service
from .app_service import AppService, get_app_service
from .service_initializer import ServiceInitializer, get_service_initializer

__all__ = [
    # Base classes
    "BaseService",
    "ServiceRegistry",

    # Core services
    "AppService",
    "get_app_service",
    "LoggingService",
    "get_logging_service",
    "ServiceInitializer",
    "get_service_initializer",

    # Grid services
    "FetchCoordinator",
    "GridService",
    "get_grid_service",
]
