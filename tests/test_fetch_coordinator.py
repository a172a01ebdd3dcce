import asyncio
from dataclasses import replace

import pytest

from tilegrid_core.cache import ViewCache
from tilegrid_core.exceptions import (
    InvalidDisplayHintsError,
    InvalidRangeError,
    SourceUnavailableError,
)
from tilegrid_core.models import FetchResult, FetchStatus
from tilegrid_core.services import FetchCoordinator


def coordinator_for(source, busy_delay=0.01):
    return FetchCoordinator(ViewCache(source), busy_delay=busy_delay)


def test_fetch_returns_laid_out_window(make_source, hints):
    coordinator = coordinator_for(make_source([50, 60, 70, 50, 60]))
    result = asyncio.run(coordinator.try_fetch(0, 5, hints))

    assert result.status == FetchStatus.READY
    assert [e.index for e in result.entries] == [0, 1, 2, 3, 4]
    assert [e.column for e in result.entries] == [0, 1, 2, 0, 1]
    assert [e.y for e in result.entries] == [0, 0, 0, 50, 60]


def test_concurrent_fetch_gets_busy(make_source, hints):
    source = make_source([10] * 20, delay=0.05)
    coordinator = coordinator_for(source)

    async def scenario():
        first, second = await asyncio.gather(
            coordinator.try_fetch(0, 5, hints),
            coordinator.try_fetch(0, 5, hints),
        )
        again = await coordinator.try_fetch(0, 5, hints)
        return first, second, again

    first, second, again = asyncio.run(scenario())
    assert not first.is_busy
    assert len(first.entries) == 5
    assert second.is_busy
    assert second.entries == []
    assert not again.is_busy
    assert [e.index for e in again.entries] == [0, 1, 2, 3, 4]
    assert source.calls == [(0, 5)]
    assert coordinator.monitor.get_counter("busy") == 1
    assert coordinator.monitor.get_counter("completed") == 2


def test_busy_is_not_an_empty_result():
    assert FetchResult.busy() != FetchResult.ready([])
    assert FetchResult.busy().is_busy
    assert not FetchResult.ready([]).is_busy


def test_invalid_range_is_rejected(make_source, hints):
    source = make_source([10] * 5)
    coordinator = coordinator_for(source)

    with pytest.raises(InvalidRangeError):
        asyncio.run(coordinator.try_fetch(-1, 5, hints))
    with pytest.raises(InvalidRangeError):
        asyncio.run(coordinator.try_fetch(0, 0, hints))
    with pytest.raises(InvalidDisplayHintsError):
        asyncio.run(coordinator.try_fetch(0, 5, replace(hints, number_of_columns=0)))
    assert source.calls == []


def test_source_failure_releases_the_lock(make_source, hints):
    source = make_source([10] * 10)
    source.error = SourceUnavailableError("backend down")
    coordinator = coordinator_for(source)

    with pytest.raises(SourceUnavailableError):
        asyncio.run(coordinator.try_fetch(0, 5, hints))
    assert not coordinator.is_fetching
    assert coordinator.monitor.get_counter("failures") == 1

    source.error = None
    result = asyncio.run(coordinator.try_fetch(0, 5, hints))
    assert len(result.entries) == 5


def test_window_is_clamped_to_end_of_data(make_source, hints):
    source = make_source([10] * 7)
    coordinator = coordinator_for(source)

    async def scenario():
        near_end = await coordinator.try_fetch(5, 5, hints)
        past_end = await coordinator.try_fetch(10, 5, hints)
        return near_end, past_end

    near_end, past_end = asyncio.run(scenario())
    assert [e.index for e in near_end.entries] == [5, 6]
    assert not past_end.is_busy
    assert past_end.entries == []
    assert source.calls == [(5, 5)]


def test_scrolling_back_prepends_the_gap(make_source, hints):
    source = make_source([10] * 30)
    coordinator = coordinator_for(source)

    async def scenario():
        await coordinator.try_fetch(10, 5, hints)
        return await coordinator.try_fetch(4, 5, hints)

    result = asyncio.run(scenario())
    assert [e.index for e in result.entries] == [4, 5, 6, 7, 8]
    assert source.calls == [(10, 5), (4, 6)]


def test_stats_include_cache(make_source, hints):
    coordinator = coordinator_for(make_source([10] * 10))
    asyncio.run(coordinator.try_fetch(0, 5, hints))

    stats = coordinator.get_stats()
    assert stats["counters"]["requests"] == 1
    assert stats["is_fetching"] is False
    assert stats["cache"]["size"] == 5
    assert "grow_after" in stats["timings"]
