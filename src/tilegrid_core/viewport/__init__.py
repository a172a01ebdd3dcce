"""Viewport-driven loading for tilegrid-core."""

from .loader import ViewportLoader

__all__ = [
    "ViewportLoader",
]
