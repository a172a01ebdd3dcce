"""Application service for the tilegrid-core server.

This module provides the FastAPI application creation and configuration service.
"""

from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from omegaconf import DictConfig
from loguru import logger

from .base_service import BaseService
from ..utils.config import config_manager


class AppService(BaseService):
    """Service for managing FastAPI application configuration and setup."""

    def __init__(self):
        """Initialize the app service."""
        super().__init__("app")
        self._app: Optional[FastAPI] = None

    async def initialize(self, cfg: Optional[DictConfig] = None) -> bool:
        """Initialize the app service.

        Args:
            cfg: Configuration for the service

        Returns:
            True if initialization was successful, False otherwise
        """
        try:
            if cfg is not None:
                self.set_config(cfg)

            self._app = self._create_app()

            self._mark_initialized()
            return True
        except Exception as e:
            logger.error(f"Failed to initialize app service: {e}")
            return False

    async def shutdown(self) -> bool:
        """Shutdown the app service."""
        self._app = None
        self._mark_shutdown()
        return True

    def get_app(self) -> Optional[FastAPI]:
        """Get the FastAPI application, or None if not initialized."""
        return self._app

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        cfg = config_manager.get_config() or {}

        app = FastAPI(
            title="TileGrid Server API",
            description=(
                "API for TileGrid: raw tile content and laid-out masonry "
                "grid windows"
            ),
            version="0.1.0",
            redirect_slashes=False,
        )

        cors_origins = cfg.get("server", {}).get("cors_origins", ["*"])
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        self._register_routes(app)

        logger.info("FastAPI application created and configured")
        return app

    def _register_routes(self, app: FastAPI) -> None:
        """Register API routes with the FastAPI application."""
        # Imported here to avoid circular imports
        from ..api import health, tiles, grids

        app.include_router(health.router, prefix="/api/v1/health", tags=["health"])
        app.include_router(tiles.router, prefix="/api/v1/tiles", tags=["tiles"])
        app.include_router(grids.router, prefix="/api/v1/grids", tags=["grids"])

        logger.debug("API routes registered successfully")


# Global app service instance
_app_service: Optional[AppService] = None


def get_app_service() -> AppService:
    """Get the global app service instance."""
    global _app_service
    if _app_service is None:
        _app_service = AppService()
    return _app_service
