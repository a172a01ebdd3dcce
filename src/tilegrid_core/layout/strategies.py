"""Column packing strategies for masonry layout.

Append growth and prepend growth use different policies by default:
appends go to the shortest column, prepends walk the columns in reverse
round-robin order starting from the head entry's column. Both are plain
strategies so a cache can swap either one.

Per-column state is a list with one slot per column; None marks a column
that has no resident entry yet.
"""

from typing import List, Optional, Sequence

from ..interfaces import AppendStrategy, PrependStrategy
from ..models.core import ContentRecord, DisplayHints, PositionedEntry


def seed_frontiers(
    resident: Sequence[PositionedEntry],
    hints: DisplayHints
) -> List[Optional[int]]:
    """Get the next free y of every column, scanning back from the tail.

    The first entry met for a column is its bottom-most one.
    """
    columns = hints.number_of_columns
    frontiers: List[Optional[int]] = [None] * columns
    seeded = 0
    for entry in reversed(resident):
        if frontiers[entry.column] is None:
            frontiers[entry.column] = entry.bottom + hints.vertical_separator_pixels
            seeded += 1
            if seeded == columns:
                break
    return frontiers


def seed_tops(
    resident: Sequence[PositionedEntry],
    hints: DisplayHints
) -> List[Optional[int]]:
    """Get the top y of every column, scanning forward from the head.

    The first entry met for a column is its topmost one. The scan stops once
    every column has been seen or the cache is exhausted.
    """
    columns = hints.number_of_columns
    tops: List[Optional[int]] = [None] * columns
    seen = 0
    for entry in resident:
        if tops[entry.column] is None:
            tops[entry.column] = entry.y
            seen += 1
            if seen == columns:
                break
    return tops


class ShortestColumnPacking(AppendStrategy):
    """Greedy shortest-column packing for appended records.

    Until every column holds an entry, records fill the unused columns in
    order at y=0. After that each record goes to the column whose frontier
    is smallest; ties go to the lowest column number.
    """

    name = "shortest_column"

    def place(
        self,
        records: Sequence[ContentRecord],
        resident: Sequence[PositionedEntry],
        hints: DisplayHints,
        first_index: int
    ) -> List[PositionedEntry]:
        frontiers = seed_frontiers(resident, hints)
        columns = range(hints.number_of_columns)
        placed = []

        for offset, record in enumerate(records):
            unseeded = [col for col in columns if frontiers[col] is None]
            if unseeded:
                column = unseeded[0]
                y = 0
            else:
                # min() keeps the first minimum, so ties resolve to the lowest column
                column = min(columns, key=lambda col: frontiers[col])
                y = frontiers[column]

            frontiers[column] = y + record.height_in_pixels + hints.vertical_separator_pixels
            placed.append(PositionedEntry(
                record=record,
                column=column,
                x=hints.column_x(column),
                y=y,
                index=first_index + offset,
            ))

        return placed


class ReverseRoundRobinPacking(PrependStrategy):
    """Strict reverse round-robin packing for prepended records.

    Walking backwards from the head entry, every new record takes the
    previous column, whatever the column heights are. A column without a
    recorded top places its record at y=0, which can overlap visually.
    """

    name = "reverse_round_robin"

    def place(
        self,
        records: Sequence[ContentRecord],
        resident: Sequence[PositionedEntry],
        hints: DisplayHints
    ) -> List[PositionedEntry]:
        if not resident:
            raise ValueError("Prepend packing needs at least one resident entry")

        columns = hints.number_of_columns
        tops = seed_tops(resident, hints)
        column = resident[0].column
        index = resident[0].index
        placed = []

        for record in reversed(records):
            column = (column - 1 + columns) % columns
            index -= 1
            top = tops[column]
            if top is None:
                y = 0
            else:
                y = top - record.height_in_pixels - hints.vertical_separator_pixels
            tops[column] = y
            placed.append(PositionedEntry(
                record=record,
                column=column,
                x=hints.column_x(column),
                y=y,
                index=index,
            ))

        placed.reverse()
        return placed


class TallestTopPacking(PrependStrategy):
    """Shortest-column packing mirrored upwards for prepended records.

    Each record goes to the column whose top is lowest on screen (the
    largest top y); ties go to the lowest column number. A column with no
    resident entry counts as having its top at y=0.
    """

    name = "tallest_top"

    def place(
        self,
        records: Sequence[ContentRecord],
        resident: Sequence[PositionedEntry],
        hints: DisplayHints
    ) -> List[PositionedEntry]:
        if not resident:
            raise ValueError("Prepend packing needs at least one resident entry")

        tops = [0 if top is None else top for top in seed_tops(resident, hints)]
        columns = range(hints.number_of_columns)
        index = resident[0].index
        placed = []

        for record in reversed(records):
            column = max(columns, key=lambda col: (tops[col], -col))
            index -= 1
            y = tops[column] - record.height_in_pixels - hints.vertical_separator_pixels
            tops[column] = y
            placed.append(PositionedEntry(
                record=record,
                column=column,
                x=hints.column_x(column),
                y=y,
                index=index,
            ))

        placed.reverse()
        return placed
