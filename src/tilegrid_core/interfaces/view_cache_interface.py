"""View cache interface for tilegrid-core."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.core import DisplayHints, PositionedEntry


class ViewCacheInterface(ABC):
    """Interface for the window of positioned entries.

    Implementations keep their entries strictly ascending and contiguous by
    index. A bounded or evicting cache can replace the default one as long
    as it honours these three operations.
    """

    @abstractmethod
    async def grow_before(self, target_start: int, hints: DisplayHints) -> int:
        """Extend the window so that it starts at target_start.

        Args:
            target_start: First index that should be resident
            hints: Display hints for laying out new entries

        Returns:
            Number of entries inserted
        """
        pass

    @abstractmethod
    async def grow_after(
        self,
        target_end_exclusive: int,
        hints: DisplayHints,
        fallback_start: int
    ) -> int:
        """Extend the window so that it reaches target_end_exclusive - 1.

        Args:
            target_end_exclusive: One past the last index that should be resident
            hints: Display hints for laying out new entries
            fallback_start: First index to load when the window is empty

        Returns:
            Number of entries inserted
        """
        pass

    @abstractmethod
    def get_range(self, start_index: int, count: int) -> List[PositionedEntry]:
        """Return count resident entries starting at start_index, or [].

        Args:
            start_index: First index wanted
            count: Number of entries wanted

        Returns:
            Exactly count entries in index order, or an empty list
        """
        pass

    @property
    @abstractmethod
    def end_of_data(self) -> Optional[int]:
        """One past the last index the source can supply, if known."""
        pass

    def close(self) -> None:
        """Release resources held by the cache. Nothing to do by default."""

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the cache.

        Returns:
            Dictionary with cache statistics
        """
        pass
