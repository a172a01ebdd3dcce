import asyncio

import pytest

from tilegrid_core.interfaces import ContentSourceInterface
from tilegrid_core.models import ContentRecord, DisplayHints
from tilegrid_core.services import grid_service as grid_service_module
from tilegrid_core.utils.config import config_manager


class FakeSource(ContentSourceInterface):
    """Records every fetch; can be slowed down, capped or made to fail."""

    def __init__(self, heights, delay=0.0):
        self.records = [ContentRecord(height, f"Tile {i}") for i, height in enumerate(heights)]
        self.delay = delay
        self.calls = []
        self.error = None
        self.max_per_call = None
        self.closed = False

    async def fetch_range(self, start_index, count):
        self.calls.append((start_index, count))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        start_index = max(0, start_index)
        end_index = min(start_index + max(0, count), len(self.records))
        if self.max_per_call is not None:
            end_index = min(end_index, start_index + self.max_per_call)
        return self.records[start_index:end_index]

    def close(self):
        self.closed = True

    def get_stats(self):
        return {"calls": len(self.calls)}


@pytest.fixture
def hints():
    return DisplayHints(
        tile_width_pixels=100,
        horizontal_separator_pixels=0,
        vertical_separator_pixels=0,
        number_of_columns=3,
    )


@pytest.fixture
def make_source():
    return FakeSource


@pytest.fixture
def clean_config():
    config_manager.reset()
    yield config_manager
    config_manager.reset()


@pytest.fixture
def fresh_grid_service(clean_config, monkeypatch):
    monkeypatch.setattr(grid_service_module, "_grid_service", None)
    return grid_service_module.get_grid_service
