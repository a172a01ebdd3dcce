"""View-data cache for tilegrid-core."""

from .view_cache import ViewCache

__all__ = [
    "ViewCache",
]
