"""API endpoints for tilegrid-core."""

from . import health, tiles, grids
__all__ = [
    "health",
    "tiles",
    "grids",
]
