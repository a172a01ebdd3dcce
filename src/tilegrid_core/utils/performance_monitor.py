"""Performance monitoring utilities for tilegrid-core."""

import statistics
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional


class PerformanceMonitor:
    """Counters and operation timings for one fetch coordinator.

    Operation durations are kept in seconds and reported in milliseconds.
    """

    def __init__(self, enabled: bool = True):
        """Initialize the performance monitor.

        Args:
            enabled: Whether the monitor records anything
        """
        self.enabled = enabled
        self.durations: Dict[str, List[float]] = {}
        self.counters: Dict[str, int] = {}
        self.start_time = time.time()

    @contextmanager
    def timed(self, operation: str) -> Iterator[None]:
        """Record how long the wrapped block takes, even if it raises."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.record(operation, time.perf_counter() - start)

    def record(self, operation: str, duration: float) -> None:
        """Record one duration for an operation."""
        if not self.enabled:
            return
        self.durations.setdefault(operation, []).append(duration)

    def increment_counter(self, counter: str, amount: int = 1) -> None:
        """Increment a counter."""
        if not self.enabled:
            return
        self.counters[counter] = self.counters.get(counter, 0) + amount

    def get_counter(self, counter: str) -> int:
        """Get the value of a counter (0 when never incremented)."""
        return self.counters.get(counter, 0)

    def get_stats(self, operation: str) -> Optional[Dict[str, Any]]:
        """Get timing statistics for an operation.

        Returns:
            Dictionary of statistics in milliseconds, or None if nothing was recorded
        """
        durations = self.durations.get(operation)
        if not durations:
            return None

        return {
            "count": len(durations),
            "min": min(durations) * 1000,
            "max": max(durations) * 1000,
            "avg": statistics.mean(durations) * 1000,
            "median": statistics.median(durations) * 1000,
            "total": sum(durations) * 1000,
        }

    def get_all_stats(self) -> Dict[str, Any]:
        """Get counters and timing statistics for every operation."""
        timings = {}
        for operation in self.durations:
            op_stats = self.get_stats(operation)
            if op_stats:
                timings[operation] = op_stats

        return {
            "counters": dict(self.counters),
            "timings": timings,
            "uptime": time.time() - self.start_time,
        }

    def reset(self) -> None:
        """Reset all timings and counters."""
        self.durations = {}
        self.counters = {}
        self.start_time = time.time()
