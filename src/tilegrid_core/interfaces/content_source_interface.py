"""Content source interface for tilegrid-core."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..models.core import ContentRecord


class ContentSourceInterface(ABC):
    """Interface for raw content sources.

    A content source supplies immutable content records for an absolute
    index range. It is the only place where the grid waits on I/O.
    """

    @abstractmethod
    async def fetch_range(self, start_index: int, count: int) -> List[ContentRecord]:
        """Fetch content records for a range.

        Implementations clamp start_index to >= 0 and clamp count to the
        available length, returning a shorter list rather than failing.

        Args:
            start_index: Absolute index of the first record
            count: Number of records wanted

        Returns:
            Records in index order, possibly fewer than count

        Raises:
            SourceUnavailableError: If the source could not be reached
        """
        pass

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the source.

        Returns:
            Dictionary with source statistics
        """
        pass

    def close(self) -> None:
        """Release resources held by the source. Nothing to do by default."""
