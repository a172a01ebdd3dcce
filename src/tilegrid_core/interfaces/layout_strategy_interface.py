"""Layout strategy interfaces for tilegrid-core."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..models.core import ContentRecord, DisplayHints, PositionedEntry


class AppendStrategy(ABC):
    """Places records that extend the grid after its last entry."""

    name: str = ""

    @abstractmethod
    def place(
        self,
        records: Sequence[ContentRecord],
        resident: Sequence[PositionedEntry],
        hints: DisplayHints,
        first_index: int
    ) -> List[PositionedEntry]:
        """Lay out records in increasing index order.

        Args:
            records: New records, in content order
            resident: Entries already in the cache, ascending by index
            hints: Display hints
            first_index: Index given to records[0]

        Returns:
            Positioned entries, ascending by index
        """
        pass


class PrependStrategy(ABC):
    """Places records that extend the grid before its first entry."""

    name: str = ""

    @abstractmethod
    def place(
        self,
        records: Sequence[ContentRecord],
        resident: Sequence[PositionedEntry],
        hints: DisplayHints
    ) -> List[PositionedEntry]:
        """Lay out records that end right before resident[0].

        Args:
            records: New records, in content order
            resident: Entries already in the cache, ascending by index (non-empty)
            hints: Display hints

        Returns:
            Positioned entries, ascending by index
        """
        pass
