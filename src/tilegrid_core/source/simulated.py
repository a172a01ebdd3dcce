"""Simulated content source for tilegrid-core.

Mimics the tiles backend, latency included, so the grid can be developed
and tested without a server.
"""

import asyncio
from typing import Any, Dict, List, Optional

import numpy as np
from loguru import logger

from ..interfaces import ContentSourceInterface
from ..models.config import (
    DEFAULT_NUM_TILES,
    DEFAULT_SOURCE_LATENCY,
    MAX_TILE_HEIGHT_UNITS,
    MIN_TILE_HEIGHT_UNITS,
    PIXELS_PER_UNIT,
)
from ..models.core import ContentRecord


class SimulatedContentSource(ContentSourceInterface):
    """In-memory content source with fake latency.

    Tile heights are whole multiples of pixels_per_unit, between
    min_height_units and max_height_units - 1 units.
    """

    def __init__(
        self,
        num_tiles: int = DEFAULT_NUM_TILES,
        latency: float = DEFAULT_SOURCE_LATENCY,
        min_height_units: int = MIN_TILE_HEIGHT_UNITS,
        max_height_units: int = MAX_TILE_HEIGHT_UNITS,
        pixels_per_unit: int = PIXELS_PER_UNIT,
        seed: Optional[int] = None,
        records: Optional[List[ContentRecord]] = None
    ):
        """Initialize the simulated source.

        Args:
            num_tiles: Number of tiles to generate
            latency: Delay in seconds applied to every fetch
            min_height_units: Smallest tile height, in units
            max_height_units: Exclusive upper bound of tile height, in units
            pixels_per_unit: Pixels per height unit
            seed: Seed for the random generator (None for a random layout)
            records: Explicit records to serve instead of generated ones
        """
        if max_height_units <= min_height_units:
            raise ValueError("max_height_units must be greater than min_height_units")

        self.latency = latency
        if records is not None:
            self._records = list(records)
        else:
            self._records = self._generate(
                num_tiles, min_height_units, max_height_units, pixels_per_unit, seed)

        self.total_requests = 0
        self.total_records_served = 0

        logger.info(
            f"SimulatedContentSource: Initialized with {len(self._records)} tiles, "
            f"latency={latency}s")

    @staticmethod
    def _generate(
        num_tiles: int,
        min_units: int,
        max_units: int,
        pixels_per_unit: int,
        seed: Optional[int]
    ) -> List[ContentRecord]:
        rng = np.random.default_rng(seed)
        units = rng.integers(0, max_units - min_units, size=num_tiles)
        heights = pixels_per_unit * (min_units + units)
        return [
            ContentRecord(height_in_pixels=int(height), text=f"Local Tile {i}")
            for i, height in enumerate(heights)
        ]

    def __len__(self) -> int:
        return len(self._records)

    async def fetch_range(self, start_index: int, count: int) -> List[ContentRecord]:
        """Fetch records from the local list after the configured delay."""
        self.total_requests += 1

        start_index = max(0, start_index)
        end_index = min(start_index + max(0, count), len(self._records))
        result = self._records[start_index:end_index]

        if self.latency > 0:
            await asyncio.sleep(self.latency)

        self.total_records_served += len(result)
        logger.debug(
            f"SimulatedContentSource: Served {len(result)} records at {start_index} "
            f"(requested {count})")
        return result

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the source."""
        return {
            "type": "simulated",
            "num_tiles": len(self._records),
            "latency": self.latency,
            "total_requests": self.total_requests,
            "total_records_served": self.total_records_served,
        }
