"""Single-flight fetch coordinator for tilegrid-core.

The FetchCoordinator sits in front of a ViewCache and lets at most one
extension run at a time. Callers that arrive while an extension is running
are not queued: after a short delay they get a Busy result and decide for
themselves when to retry.
"""

import asyncio
from typing import Any, Dict, List, Optional

from loguru import logger

from ..interfaces import ViewCacheInterface
from ..models.config import DEFAULT_BUSY_DELAY
from ..models.core import DisplayHints, FetchResult, PositionedEntry
from ..utils.performance_monitor import PerformanceMonitor
from ..utils.validation import validate_display_hints, validate_range


class FetchCoordinator:
    """Single-flight gate in front of a view cache.

    The lock guards the cache together with the in-progress flag: the cache
    is only ever grown while the lock is held. Checking locked() and
    acquiring the lock happen with no await in between, so on one event
    loop the check-and-set cannot interleave with another caller.
    """

    def __init__(
        self,
        cache: ViewCacheInterface,
        busy_delay: float = DEFAULT_BUSY_DELAY,
        monitor: Optional[PerformanceMonitor] = None
    ):
        """Initialize the coordinator.

        Args:
            cache: The cache this coordinator guards
            busy_delay: Seconds a contended caller waits before getting Busy
            monitor: Performance monitor for counters and timings
        """
        self.cache = cache
        self.busy_delay = busy_delay
        self.monitor = monitor or PerformanceMonitor()
        self._lock = asyncio.Lock()

    @property
    def is_fetching(self) -> bool:
        """Whether an extension is in progress."""
        return self._lock.locked()

    async def try_fetch(
        self,
        start_index: int,
        count: int,
        hints: DisplayHints
    ) -> FetchResult:
        """Make [start_index, start_index + count) resident and return it.

        Args:
            start_index: First index wanted
            count: Number of entries wanted
            hints: Display hints for laying out new entries

        Returns:
            FetchResult.ready with the entries, or FetchResult.busy if another
            extension was already running

        Raises:
            InvalidRangeError: If start_index < 0 or count <= 0
            InvalidDisplayHintsError: If the hints cannot be laid out
            SourceUnavailableError: If the content source failed
        """
        validate_range(start_index, count)
        validate_display_hints(hints)
        self.monitor.increment_counter("requests")

        if self._lock.locked():
            # Resolve later than the caller's own stack, never synchronously
            await asyncio.sleep(self.busy_delay)
            self.monitor.increment_counter("busy")
            logger.debug(f"FetchCoordinator: Busy, rejecting {start_index}+{count}")
            return FetchResult.busy()

        async with self._lock:
            try:
                with self.monitor.timed("grow_before"):
                    await self.cache.grow_before(start_index, hints)
                with self.monitor.timed("grow_after"):
                    await self.cache.grow_after(start_index + count, hints, start_index)
                entries = self._query(start_index, count)
            except Exception as e:
                self.monitor.increment_counter("failures")
                logger.error(f"FetchCoordinator: Fetch {start_index}+{count} failed: {e}")
                raise

        self.monitor.increment_counter("completed")
        logger.debug(f"FetchCoordinator: Returning {len(entries)} entries for {start_index}+{count}")
        return FetchResult.ready(entries)

    def _query(self, start_index: int, count: int) -> List[PositionedEntry]:
        """Slice the cache, stopping at the end of the data when it is known."""
        end_of_data = self.cache.end_of_data
        if end_of_data is not None:
            count = min(count, end_of_data - start_index)
            if count <= 0:
                return []
        return self.cache.get_range(start_index, count)

    def close(self) -> None:
        """Release the cache's content source."""
        self.cache.close()

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the coordinator and its cache."""
        stats = self.monitor.get_all_stats()
        stats["is_fetching"] = self.is_fetching
        stats["busy_delay"] = self.busy_delay
        stats["cache"] = self.cache.get_stats()
        return stats
