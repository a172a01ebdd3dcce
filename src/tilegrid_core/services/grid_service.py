"""Grid service for tilegrid-core.

Keeps one independent grid per grid id. Each grid owns its own ViewCache
and FetchCoordinator, so two grids never share a window or a lock. The
service also owns the simulated tile backend served by the tiles endpoint.
"""

from typing import Any, Dict, Optional

from loguru import logger
from omegaconf import DictConfig

from ..cache import ViewCache
from ..interfaces import ContentSourceInterface
from ..layout import get_append_strategy, get_prepend_strategy
from ..models.core import DisplayHints
from ..source import SimulatedContentSource, create_content_source
from ..utils.config import (
    config_manager,
    get_display_hints,
    get_fetch_config,
    get_layout_strategy_names,
    get_source_config,
)
from .base_service import BaseService
from .fetch_coordinator import FetchCoordinator


class GridService(BaseService):
    """Service managing grid instances and the tile backend."""

    def __init__(self):
        """Initialize the grid service."""
        super().__init__("grid")
        self._grids: Dict[str, FetchCoordinator] = {}
        self._tile_backend: Optional[SimulatedContentSource] = None

    async def initialize(self, cfg: Optional[DictConfig] = None) -> bool:
        """Initialize the grid service.

        Args:
            cfg: Configuration for the service

        Returns:
            True if initialization was successful, False otherwise
        """
        try:
            if cfg is not None:
                self.set_config(cfg)
                if not config_manager.get_config():
                    config_manager.set_config(cfg)

            # Validate the configured strategies up front
            append_name, prepend_name = get_layout_strategy_names()
            get_append_strategy(append_name)
            get_prepend_strategy(prepend_name)

            self._tile_backend = self._create_tile_backend()
            self._mark_initialized()
            return True
        except Exception as e:
            logger.error(f"Failed to initialize grid service: {e}")
            return False

    async def shutdown(self) -> bool:
        """Shutdown the grid service, dropping every grid.

        Returns:
            True if shutdown was successful, False otherwise
        """
        for coordinator in self._grids.values():
            coordinator.close()
        self._grids.clear()
        self._tile_backend = None
        self._mark_shutdown()
        return True

    def _create_tile_backend(self) -> SimulatedContentSource:
        # The tiles endpoint always serves simulated data, even when grids
        # read through HTTP, so a grid pointed at this server cannot loop.
        source_config = dict(get_source_config())
        source_config["type"] = "simulated"
        return create_content_source(source_config)

    @property
    def tile_backend(self) -> SimulatedContentSource:
        if self._tile_backend is None:
            self._tile_backend = self._create_tile_backend()
        return self._tile_backend

    def create_grid(
        self,
        grid_id: str,
        source: Optional[ContentSourceInterface] = None
    ) -> FetchCoordinator:
        """Create (or replace) a grid.

        Args:
            grid_id: Identifier of the grid
            source: Content source for the grid (from configuration when None)

        Returns:
            The grid's fetch coordinator
        """
        append_name, prepend_name = get_layout_strategy_names()
        cache = ViewCache(
            source=source or create_content_source(),
            append_strategy=get_append_strategy(append_name),
            prepend_strategy=get_prepend_strategy(prepend_name),
        )
        coordinator = FetchCoordinator(
            cache,
            busy_delay=get_fetch_config()["busy_delay"],
        )
        previous = self._grids.get(grid_id)
        if previous is not None:
            previous.close()
        self._grids[grid_id] = coordinator
        logger.info(
            f"GridService: Created grid '{grid_id}' "
            f"(append={append_name}, prepend={prepend_name})")
        return coordinator

    def find_grid(self, grid_id: str) -> Optional[FetchCoordinator]:
        """Get a grid's coordinator if the grid exists."""
        return self._grids.get(grid_id)

    def get_grid(self, grid_id: str) -> FetchCoordinator:
        """Get a grid's coordinator, creating the grid on first use."""
        coordinator = self.find_grid(grid_id)
        if coordinator is None:
            coordinator = self.create_grid(grid_id)
        return coordinator

    def drop_grid(self, grid_id: str) -> bool:
        """Forget a grid and its cache.

        Returns:
            True if the grid existed
        """
        coordinator = self._grids.pop(grid_id, None)
        if coordinator is not None:
            coordinator.close()
            logger.info(f"GridService: Dropped grid '{grid_id}'")
            return True
        return False

    def default_hints(self) -> DisplayHints:
        return get_display_hints()

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics for every grid and the tile backend."""
        return {
            "grids": {grid_id: grid.get_stats() for grid_id, grid in self._grids.items()},
            "tile_backend": self.tile_backend.get_stats(),
        }


# Global grid service instance
_grid_service: Optional[GridService] = None


def get_grid_service() -> GridService:
    """Get the global grid service instance."""
    global _grid_service
    if _grid_service is None:
        _grid_service = GridService()
    return _grid_service
