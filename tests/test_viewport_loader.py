import asyncio

import pytest

from tilegrid_core.cache import ViewCache
from tilegrid_core.models import FetchResult
from tilegrid_core.services import FetchCoordinator
from tilegrid_core.utils.retry import fetch_with_backoff, next_delay
from tilegrid_core.viewport import ViewportLoader


class FlakyCoordinator:
    """Answers busy a fixed number of times before succeeding."""

    def __init__(self, busy_times):
        self.busy_times = busy_times
        self.calls = 0

    async def try_fetch(self, start_index, count, hints):
        self.calls += 1
        if self.calls <= self.busy_times:
            return FetchResult.busy()
        return FetchResult.ready([])


def loader_for(source, hints, **kwargs):
    coordinator = FetchCoordinator(ViewCache(source), busy_delay=0.001)
    return ViewportLoader(coordinator, hints, retry_initial_delay=0.001, **kwargs)


def test_next_delay_doubles_up_to_cap():
    assert next_delay(0.1) == 0.2
    assert next_delay(3.0, max_delay=5.0) == 5.0
    assert next_delay(1.0, max_delay=5.0) == 2.0


def test_backoff_retries_until_ready(hints):
    coordinator = FlakyCoordinator(busy_times=3)
    result = asyncio.run(fetch_with_backoff(coordinator, 0, 5, hints, initial_delay=0.001))
    assert not result.is_busy
    assert coordinator.calls == 4


def test_backoff_gives_up_after_max_attempts(hints):
    coordinator = FlakyCoordinator(busy_times=10)
    result = asyncio.run(fetch_with_backoff(
        coordinator, 0, 5, hints, initial_delay=0.001, max_attempts=2))
    assert result.is_busy
    assert coordinator.calls == 2


def test_initial_load_fills_viewport_and_buffer(make_source, hints):
    source = make_source([100] * 100)
    loader = loader_for(source, hints, initial_chunk=10)

    tiles = asyncio.run(loader.initial_load(300))

    assert len(tiles) == 20
    assert tiles[-1].y == 600
    assert source.calls == [(0, 10), (10, 10)]


def test_initial_load_stops_when_source_runs_out(make_source, hints):
    source = make_source([100] * 4)
    loader = loader_for(source, hints, initial_chunk=10)
    assert len(asyncio.run(loader.initial_load(300))) == 4


def test_visible_range(make_source, hints):
    loader = loader_for(make_source([100] * 100), hints)
    assert loader.visible_range(0, 300) is None

    asyncio.run(loader.initial_load(300))
    assert loader.visible_range(150, 300) == (6, 14)
    assert loader.visible_range(5000, 300) is None


def test_buffered_window_clamps_at_zero(make_source, hints):
    loader = loader_for(make_source([100]), hints, buffered_percentage=0.5)
    assert loader.buffered_window(2, 12) == (0, 17)
    assert loader.buffered_window(20, 30) == (15, 20)


def test_scroll_extends_window(make_source, hints):
    source = make_source([100] * 100)
    loader = loader_for(source, hints, initial_chunk=10)

    async def scenario():
        await loader.initial_load(300)
        first = await loader.on_scroll(150, 300)
        second = await loader.on_scroll(150, 300)
        return first, second

    first, second = asyncio.run(scenario())
    assert [t.index for t in first] == list(range(22))
    assert second is None
    assert source.calls[-1] == (20, 2)
    assert loader.content_height() == 800


def test_loader_from_config(make_source, clean_config):
    clean_config.set_config({
        "display": {"columns": 2},
        "viewport": {"initial_chunk": 4, "buffered_percentage": 0.5},
        "fetch": {"retry_initial_delay": 0.2, "retry_max_delay": 1.0},
    })
    coordinator = FetchCoordinator(ViewCache(make_source([100])))
    loader = ViewportLoader.from_config(coordinator)

    assert loader.hints.number_of_columns == 2
    assert loader.initial_chunk == 4
    assert loader.buffered_percentage == 0.5
    assert (loader.retry_initial_delay, loader.retry_max_delay) == (0.2, 1.0)


def test_loader_rejects_empty_chunks(make_source, hints):
    with pytest.raises(ValueError):
        loader_for(make_source([100]), hints, initial_chunk=0)
