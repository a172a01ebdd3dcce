"""ViewCache implementation for tilegrid-core.

The ViewCache owns the window of positioned entries. It grows the window
before its first entry or after its last entry by pulling records from a
content source and laying them out. Entries are never removed or changed
once inserted, so the window is always one contiguous, ascending run of
indices.

The cache itself does not serialize callers; the FetchCoordinator does.
"""

import time
from typing import Any, Dict, List, Optional

from loguru import logger

from ..interfaces import (
    AppendStrategy,
    ContentSourceInterface,
    PrependStrategy,
    ViewCacheInterface,
)
from ..layout import ReverseRoundRobinPacking, ShortestColumnPacking
from ..models.core import DisplayHints, PositionedEntry


class ViewCache(ViewCacheInterface):
    """Contiguous window of laid-out grid entries.

    Features:
    - Grow-before and grow-after from a content source
    - Swappable append and prepend layout strategies
    - Display hints pinned by the first insertion
    - End-of-data tracking from short reads
    - Statistics tracking
    """

    def __init__(
        self,
        source: ContentSourceInterface,
        append_strategy: Optional[AppendStrategy] = None,
        prepend_strategy: Optional[PrependStrategy] = None
    ):
        """Initialize the cache.

        Args:
            source: Content source records are pulled from
            append_strategy: Layout used for grow-after (shortest column by default)
            prepend_strategy: Layout used for grow-before (reverse round-robin by default)
        """
        self.source = source
        self.append_strategy = append_strategy or ShortestColumnPacking()
        self.prepend_strategy = prepend_strategy or ReverseRoundRobinPacking()

        self._entries: List[PositionedEntry] = []
        self._hints: Optional[DisplayHints] = None
        self._end_of_data: Optional[int] = None

        # Statistics
        self.total_source_requests = 0
        self.total_prepended = 0
        self.total_appended = 0
        self.dropped_batches = 0
        self.last_grow_time = 0.0

    # ========== Read access ==========

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> List[PositionedEntry]:
        """Copy of the resident entries, ascending by index."""
        return list(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def first_index(self) -> Optional[int]:
        return self._entries[0].index if self._entries else None

    @property
    def last_index(self) -> Optional[int]:
        return self._entries[-1].index if self._entries else None

    @property
    def hints(self) -> Optional[DisplayHints]:
        """Display hints pinned by the first insertion, if any."""
        return self._hints

    @property
    def end_of_data(self) -> Optional[int]:
        return self._end_of_data

    def get_range(self, start_index: int, count: int) -> List[PositionedEntry]:
        """Return count entries starting at start_index if all are resident.

        Args:
            start_index: First index wanted
            count: Number of entries wanted

        Returns:
            Exactly count entries in index order, or [] when any of them is missing
        """
        if count <= 0 or len(self._entries) < count:
            return []

        first = self._entries[0].index
        if start_index < first or start_index > first + len(self._entries) - count:
            return []

        offset = start_index - first
        return self._entries[offset:offset + count]

    # ========== Growth ==========

    async def grow_before(self, target_start: int, hints: DisplayHints) -> int:
        """Prepend entries so the window starts at target_start.

        A no-op when the cache is empty (grow_after loads the first batch) or
        when target_start is already resident.

        Returns:
            Number of entries inserted
        """
        if not self._entries or target_start >= self._entries[0].index:
            return 0

        hints = self._effective_hints(hints)
        head_index = self._entries[0].index
        gap = head_index - target_start
        logger.debug(f"ViewCache.grow_before: Fetching {gap} records at {target_start}")

        start_time = time.time()
        records = await self._fetch(target_start, gap)

        if len(records) < gap:
            # A short batch would leave a hole before the head
            logger.warning(
                f"ViewCache.grow_before: Source returned {len(records)} of {gap} records "
                f"at {target_start}, discarding batch")
            self.dropped_batches += 1
            return 0

        if not self._entries or self._entries[0].index != head_index:
            logger.warning("ViewCache.grow_before: Cache head moved during fetch, discarding stale batch")
            self.dropped_batches += 1
            return 0

        placed = self.prepend_strategy.place(records, self._entries, hints)
        self._pin_hints(hints)
        self._entries[0:0] = placed
        self.total_prepended += len(placed)
        self.last_grow_time = time.time() - start_time

        logger.debug(
            f"ViewCache.grow_before: Prepended {len(placed)} entries, "
            f"window is now {self.first_index}..{self.last_index}")
        return len(placed)

    async def grow_after(
        self,
        target_end_exclusive: int,
        hints: DisplayHints,
        fallback_start: int
    ) -> int:
        """Append entries so the window reaches target_end_exclusive - 1.

        On an empty cache this loads target_end_exclusive - fallback_start
        records starting at fallback_start.

        Returns:
            Number of entries inserted
        """
        if self._end_of_data is not None:
            target_end_exclusive = min(target_end_exclusive, self._end_of_data)

        if not self._entries:
            start = fallback_start
            expected_last = None
        elif target_end_exclusive - 1 > self._entries[-1].index:
            start = self._entries[-1].index + 1
            expected_last = self._entries[-1].index
        else:
            return 0

        count = target_end_exclusive - start
        if count <= 0:
            return 0

        hints = self._effective_hints(hints)
        logger.debug(f"ViewCache.grow_after: Fetching {count} records at {start}")

        start_time = time.time()
        records = await self._fetch(start, count)

        if len(records) < count:
            self._mark_end_of_data(start + len(records))

        if not records:
            return 0

        current_last = self._entries[-1].index if self._entries else None
        if current_last != expected_last:
            logger.warning("ViewCache.grow_after: Cache tail moved during fetch, discarding stale batch")
            self.dropped_batches += 1
            return 0

        placed = self.append_strategy.place(records, self._entries, hints, start)
        self._pin_hints(hints)
        self._entries.extend(placed)
        self.total_appended += len(placed)
        self.last_grow_time = time.time() - start_time

        logger.debug(
            f"ViewCache.grow_after: Appended {len(placed)} entries, "
            f"window is now {self.first_index}..{self.last_index}")
        return len(placed)

    async def _fetch(self, start_index: int, count: int):
        self.total_source_requests += 1
        return await self.source.fetch_range(start_index, count)

    def _effective_hints(self, hints: DisplayHints) -> DisplayHints:
        """Get the hints a new batch is laid out with.

        Once entries exist their hints win; a mismatch is logged and ignored.
        """
        if self._hints is None:
            return hints
        if hints != self._hints:
            logger.warning(
                f"ViewCache: Display hints changed ({hints}), keeping {self._hints}; "
                f"entries are never re-laid out")
        return self._hints

    def _pin_hints(self, hints: DisplayHints) -> None:
        """Pin hints when the first entries are inserted."""
        if self._hints is None:
            self._hints = hints

    def _mark_end_of_data(self, end: int) -> None:
        if self._end_of_data is None or end < self._end_of_data:
            self._end_of_data = end
            logger.info(f"ViewCache: Short read, end of data at index {end}")

    def close(self) -> None:
        """Release the content source. The entries stay readable."""
        self.source.close()

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the cache."""
        return {
            "size": len(self._entries),
            "first_index": self.first_index,
            "last_index": self.last_index,
            "end_of_data": self._end_of_data,
            "total_source_requests": self.total_source_requests,
            "total_prepended": self.total_prepended,
            "total_appended": self.total_appended,
            "dropped_batches": self.dropped_batches,
            "last_grow_time": self.last_grow_time,
            "append_strategy": self.append_strategy.name,
            "prepend_strategy": self.prepend_strategy.name,
        }
