"""Viewport loader for tilegrid-core.

Drives a grid the way a scrolling view does, without any UI: it fills the
first screen, and on every scroll works out which tiles are visible, pads
that window on both sides and makes it resident. Busy answers are retried
with exponential backoff.
"""

import math
from typing import List, Optional, Tuple

from loguru import logger

from ..models.config import (
    DEFAULT_BUFFERED_PERCENTAGE,
    DEFAULT_INITIAL_CHUNK,
    DEFAULT_RETRY_INITIAL_DELAY,
    DEFAULT_RETRY_MAX_DELAY,
)
from ..models.core import DisplayHints, PositionedEntry
from ..utils.config import get_display_hints, get_fetch_config, get_viewport_config
from ..utils.retry import fetch_with_backoff


class ViewportLoader:
    """Keeps the tiles around a viewport resident.

    Args:
        coordinator: FetchCoordinator of the grid being viewed
        hints: Display hints of the view
        initial_chunk: Tiles added per step while filling the first screen
        buffered_percentage: Share of the visible tile count kept cached
            above and below the viewport (1.0 keeps one screen each side)
    """

    def __init__(
        self,
        coordinator,
        hints: DisplayHints,
        initial_chunk: int = DEFAULT_INITIAL_CHUNK,
        buffered_percentage: float = DEFAULT_BUFFERED_PERCENTAGE,
        retry_initial_delay: float = DEFAULT_RETRY_INITIAL_DELAY,
        retry_max_delay: Optional[float] = DEFAULT_RETRY_MAX_DELAY
    ):
        if initial_chunk <= 0:
            raise ValueError("initial_chunk must be positive")

        self.coordinator = coordinator
        self.hints = hints
        self.initial_chunk = initial_chunk
        self.buffered_percentage = buffered_percentage
        self.retry_initial_delay = retry_initial_delay
        self.retry_max_delay = retry_max_delay

        self.tiles: List[PositionedEntry] = []
        self.first_visible_index: Optional[int] = None
        self.last_visible_index: Optional[int] = None

    @classmethod
    def from_config(cls, coordinator, hints: Optional[DisplayHints] = None) -> "ViewportLoader":
        """Create a loader from the ``viewport`` and ``fetch`` configuration groups."""
        viewport = get_viewport_config()
        fetch = get_fetch_config()
        return cls(
            coordinator,
            hints or get_display_hints(),
            initial_chunk=viewport["initial_chunk"],
            buffered_percentage=viewport["buffered_percentage"],
            retry_initial_delay=fetch["retry_initial_delay"],
            retry_max_delay=fetch["retry_max_delay"],
        )

    async def _fetch(self, start_index: int, count: int) -> List[PositionedEntry]:
        result = await fetch_with_backoff(
            self.coordinator,
            start_index,
            count,
            self.hints,
            initial_delay=self.retry_initial_delay,
            max_delay=self.retry_max_delay,
        )
        return result.entries

    async def initial_load(self, viewport_height: int) -> List[PositionedEntry]:
        """Fetch from index 0 until the viewport and its buffer are covered.

        Each round asks for initial_chunk more tiles than the last; earlier
        tiles come straight from the cache.
        """
        target_y = viewport_height + viewport_height * self.buffered_percentage
        count = self.initial_chunk

        while True:
            tiles = await self._fetch(0, count)
            self.tiles = tiles
            if not tiles or len(tiles) < count:
                # The source ran out before the screen was full
                break
            if tiles[-1].y >= target_y:
                break
            count += self.initial_chunk

        logger.debug(f"ViewportLoader: Initial load holds {len(self.tiles)} tiles")
        return self.tiles

    def visible_range(self, scroll_top: int, viewport_height: int) -> Optional[Tuple[int, int]]:
        """Get the (first, last) indices of visible tiles.

        The first visible tile is the first one at or below scroll_top; the
        last is the last one starting above the bottom edge.

        Returns:
            The index pair, or None when no tile qualifies
        """
        first = next((tile.index for tile in self.tiles if tile.y >= scroll_top), None)
        last = next(
            (tile.index for tile in reversed(self.tiles) if tile.y < scroll_top + viewport_height),
            None)
        if first is None or last is None:
            return None
        return first, last

    def buffered_window(self, first_visible: int, last_visible: int) -> Tuple[int, int]:
        """Get the (start, count) window to keep resident around the visible tiles."""
        visible = last_visible - first_visible
        buffered = math.floor(visible * self.buffered_percentage)
        start = max(0, first_visible - buffered)
        end = last_visible + buffered
        return start, end - start

    async def on_scroll(self, scroll_top: int, viewport_height: int) -> Optional[List[PositionedEntry]]:
        """React to a scroll position.

        Returns:
            The new tiles, or None when nothing had to be fetched
        """
        visible = self.visible_range(scroll_top, viewport_height)
        if visible is None:
            return None

        first, last = visible
        if first == self.first_visible_index and last == self.last_visible_index:
            return None

        self.first_visible_index = first
        self.last_visible_index = last

        start, count = self.buffered_window(first, last)
        if count <= 0:
            return None

        tiles = await self._fetch(start, count)
        if tiles:
            self.tiles = tiles
        return tiles

    def content_height(self) -> int:
        """Height of the laid-out content, from the lowest tile bottom."""
        return max((tile.bottom for tile in self.tiles), default=0)
