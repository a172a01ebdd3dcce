import random

import pytest

from tilegrid_core.layout import (
    ReverseRoundRobinPacking,
    ShortestColumnPacking,
    TallestTopPacking,
    get_append_strategy,
    get_prepend_strategy,
    seed_frontiers,
    seed_tops,
)
from tilegrid_core.models import ContentRecord, DisplayHints, PositionedEntry


def records(*heights):
    return [ContentRecord(height, f"Tile {i}") for i, height in enumerate(heights)]


def entry(index, column, y, height=10):
    return PositionedEntry(
        record=ContentRecord(height, f"Tile {index}"),
        column=column,
        x=column * 100,
        y=y,
        index=index,
    )


def test_cold_start_fills_columns_then_shortest(hints):
    placed = ShortestColumnPacking().place(records(50, 60, 70, 50, 60), [], hints, 0)
    assert [e.index for e in placed] == [0, 1, 2, 3, 4]
    assert [e.column for e in placed] == [0, 1, 2, 0, 1]
    assert [e.y for e in placed] == [0, 0, 0, 50, 60]
    assert [e.x for e in placed] == [0, 100, 200, 0, 100]


def test_append_applies_separators():
    hints = DisplayHints(100, 10, 5, 2)
    placed = ShortestColumnPacking().place(records(40, 20, 10), [], hints, 0)
    assert [(e.column, e.x, e.y) for e in placed] == [(0, 0, 0), (1, 110, 0), (1, 110, 25)]


def test_append_ties_go_to_lowest_column(hints):
    strategy = ShortestColumnPacking()
    first = strategy.place(records(50, 50, 50), [], hints, 0)
    more = strategy.place(records(10, 10), first, hints, 3)
    assert [(e.index, e.column, e.y) for e in more] == [(3, 0, 50), (4, 1, 50)]


def test_append_picks_column_with_smallest_frontier():
    hints = DisplayHints(100, 0, 7, 4)
    rng = random.Random(3)
    heights = [rng.randint(3, 14) * 20 for _ in range(200)]
    placed = ShortestColumnPacking().place(records(*heights), [], hints, 0)

    frontiers = [None] * 4
    for e in placed:
        if None in frontiers:
            assert e.column == frontiers.index(None)
            assert e.y == 0
        else:
            assert frontiers[e.column] == min(frontiers)
            assert e.column == frontiers.index(min(frontiers))
            assert e.y == frontiers[e.column]
        frontiers[e.column] = e.bottom + 7


def test_append_in_batches_matches_single_batch(hints):
    rng = random.Random(11)
    heights = [rng.randint(3, 14) * 20 for _ in range(60)]
    strategy = ShortestColumnPacking()
    whole = strategy.place(records(*heights), [], hints, 0)

    resident = []
    for start in range(0, 60, 7):
        resident.extend(strategy.place(records(*heights[start:start + 7]), resident, hints, start))

    assert [(e.index, e.column, e.y) for e in resident] == [(e.index, e.column, e.y) for e in whole]


def test_append_fills_columns_missing_from_resident(hints):
    resident = [entry(5, 1, 0, height=40)]
    placed = ShortestColumnPacking().place(records(30, 30, 30), resident, hints, 6)
    assert [(e.index, e.column, e.y) for e in placed] == [(6, 0, 0), (7, 2, 0), (8, 0, 30)]


def test_seed_frontiers_uses_bottom_most_entry_per_column():
    hints = DisplayHints(100, 0, 5, 2)
    resident = [entry(0, 0, 0, 30), entry(1, 1, 0, 20), entry(2, 1, 25, 20), entry(3, 0, 35, 10)]
    assert seed_frontiers(resident, hints) == [50, 50]


def test_prepend_walks_columns_in_reverse_from_head():
    hints = DisplayHints(100, 0, 0, 3)
    resident = [entry(10, 1, 0), entry(11, 2, 0), entry(12, 0, 40)]
    placed = ReverseRoundRobinPacking().place(records(30, 20), resident, hints)
    assert [(e.index, e.column, e.y) for e in placed] == [(8, 2, -30), (9, 0, 20)]
    assert [e.x for e in placed] == [200, 0]


def test_prepend_cycles_regardless_of_heights(hints):
    resident = ShortestColumnPacking().place(records(*([80] * 9)), [], hints, 20)
    rng = random.Random(5)
    placed = ReverseRoundRobinPacking().place(
        records(*[rng.randint(1, 300) for _ in range(7)]), resident, hints)

    assert [e.index for e in placed] == list(range(13, 20))
    column = resident[0].column
    for e in reversed(placed):
        column = (column - 1) % 3
        assert e.column == column


def test_prepend_into_unseeded_column_starts_at_zero(hints):
    resident = [entry(5, 0, 0)]
    placed = ReverseRoundRobinPacking().place(records(10, 10), resident, hints)
    assert [(e.index, e.column, e.y) for e in placed] == [(3, 1, 0), (4, 2, 0)]


def test_prepend_applies_vertical_separator():
    hints = DisplayHints(100, 0, 5, 2)
    resident = [entry(4, 0, 0), entry(5, 1, 0)]
    placed = ReverseRoundRobinPacking().place(records(20), resident, hints)
    assert [(e.index, e.column, e.y) for e in placed] == [(3, 1, -25)]


def test_seed_tops_keeps_topmost_entry_per_column():
    hints = DisplayHints(100, 0, 0, 2)
    resident = [entry(10, 0, 100), entry(11, 1, 120), entry(12, 0, 200)]
    assert seed_tops(resident, hints) == [100, 120]


def test_prepend_requires_resident_entries(hints):
    with pytest.raises(ValueError):
        ReverseRoundRobinPacking().place(records(10), [], hints)
    with pytest.raises(ValueError):
        TallestTopPacking().place(records(10), [], hints)


def test_tallest_top_picks_lowest_top():
    hints = DisplayHints(100, 0, 0, 2)
    resident = [entry(10, 0, 0, 50), entry(11, 1, 50, 10)]
    placed = TallestTopPacking().place(records(10, 10), resident, hints)
    assert [(e.index, e.column, e.y) for e in placed] == [(8, 1, 30), (9, 1, 40)]


def test_tallest_top_ties_go_to_lowest_column(hints):
    resident = [entry(3, 0, 0), entry(4, 1, 0), entry(5, 2, 0)]
    placed = TallestTopPacking().place(records(10), resident, hints)
    assert [(e.index, e.column, e.y) for e in placed] == [(2, 0, -10)]


def test_strategy_lookup_by_name():
    assert isinstance(get_append_strategy("shortest_column"), ShortestColumnPacking)
    assert isinstance(get_prepend_strategy("reverse_round_robin"), ReverseRoundRobinPacking)
    assert isinstance(get_prepend_strategy("Tallest_Top"), TallestTopPacking)

    with pytest.raises(ValueError):
        get_append_strategy("round_robin")
    with pytest.raises(ValueError):
        get_prepend_strategy("shortest_column")
