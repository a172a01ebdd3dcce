"""Content source factory for tilegrid-core."""

from typing import Any, Dict, Optional

from loguru import logger

from ..interfaces import ContentSourceInterface
from ..models.config import (
    DEFAULT_HTTP_BASE_URL,
    DEFAULT_HTTP_ENDPOINT,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_NUM_TILES,
    DEFAULT_SOURCE_LATENCY,
    MAX_TILE_HEIGHT_UNITS,
    MIN_TILE_HEIGHT_UNITS,
    PIXELS_PER_UNIT,
)
from ..utils.config import get_source_config
from .http import HttpContentSource
from .simulated import SimulatedContentSource

VALID_SOURCE_TYPES = {"simulated", "http"}


def create_content_source(source_config: Optional[Dict[str, Any]] = None) -> ContentSourceInterface:
    """Create a content source from configuration.

    Args:
        source_config: The ``source`` configuration group (read from the
            ConfigManager when None)

    Returns:
        A content source instance
    """
    if source_config is None:
        source_config = get_source_config()

    source_type = str(source_config.get("type", "simulated")).lower()
    if source_type not in VALID_SOURCE_TYPES:
        raise ValueError(f"Unknown content source type: {source_type}. "
                         f"Valid types: {', '.join(sorted(VALID_SOURCE_TYPES))}")

    if source_type == "http":
        http_config = source_config.get("http") or {}
        logger.debug("Creating HTTP content source")
        return HttpContentSource(
            base_url=http_config.get("base_url", DEFAULT_HTTP_BASE_URL),
            endpoint=http_config.get("endpoint", DEFAULT_HTTP_ENDPOINT),
            timeout=float(http_config.get("timeout", DEFAULT_HTTP_TIMEOUT)),
        )

    simulated_config = source_config.get("simulated") or {}
    logger.debug("Creating simulated content source")
    return SimulatedContentSource(
        num_tiles=int(simulated_config.get("num_tiles", DEFAULT_NUM_TILES)),
        latency=float(simulated_config.get("latency", DEFAULT_SOURCE_LATENCY)),
        min_height_units=int(simulated_config.get("min_height_units", MIN_TILE_HEIGHT_UNITS)),
        max_height_units=int(simulated_config.get("max_height_units", MAX_TILE_HEIGHT_UNITS)),
        pixels_per_unit=int(simulated_config.get("pixels_per_unit", PIXELS_PER_UNIT)),
        seed=simulated_config.get("seed"),
    )
