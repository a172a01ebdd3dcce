"""TileGrid server implementation.

This module provides the main server entry point and orchestrates
service initialization and server startup.
"""

import asyncio
from typing import Optional
from fastapi import FastAPI
from loguru import logger
from omegaconf import DictConfig
import uvicorn

from .utils.config import config_manager
from .services import get_app_service, get_service_initializer


def run_server(cfg: Optional[DictConfig] = None):
    """Run the TileGrid server with the given configuration.

    Args:
        cfg: Configuration from Hydra (DictConfig)
    """
    # Without a configuration, go through the Hydra entry point
    if cfg is None:
        logger.info("No configuration provided, using __main__.main to run server")
        from . import __main__
        __main__.main()
        return

    config_manager.set_config(cfg)

    server_config = cfg.get("server", {})
    host = server_config.get("host", "localhost")
    port = server_config.get("port", 8000)
    logger.info(f"Starting TileGrid server on {host}:{port}")

    service_initializer = get_service_initializer()
    success = asyncio.run(service_initializer.initialize_all_services(cfg))
    if not success:
        logger.error("Failed to initialize services, shutting down")
        return

    # Grids hold asyncio locks, so they are created lazily on uvicorn's loop
    uvicorn.run(
        create_app(),
        host=host,
        port=port,
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    This function can also be used by uvicorn as a factory function.

    Returns:
        Configured FastAPI application
    """
    app_service = get_app_service()
    app = app_service.get_app()

    if app is None:
        logger.warning("App service not initialized, creating app directly")
        if not asyncio.run(app_service.initialize()):
            raise RuntimeError("Failed to create FastAPI application")
        app = app_service.get_app()

    return app


def main():
    """Entry point for the tilegrid-core command.

    This function is called when running:
    - `tilegrid-core`
    - `python -m tilegrid_core` (via __main__.py)
    """
    run_server()
