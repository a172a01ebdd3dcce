"""TileGrid core: view-data cache and masonry layout engine.

Content records arrive from a content source by absolute index. The
ViewCache lays them out into positioned entries and grows a contiguous
window of them in either direction; the FetchCoordinator lets only one
extension run at a time.
"""

from .models import (
    ContentRecord,
    DisplayHints,
    PositionedEntry,
    FetchStatus,
    FetchResult,
)
from .exceptions import (
    TileGridError,
    InvalidRangeError,
    InvalidDisplayHintsError,
    SourceUnavailableError,
)
from .cache import ViewCache
from .services.fetch_coordinator import FetchCoordinator
from .source import SimulatedContentSource, HttpContentSource
from .viewport import ViewportLoader

__version__ = "0.1.0"

__all__ = [
    "ContentRecord",
    "DisplayHints",
    "PositionedEntry",
    "FetchStatus",
    "FetchResult",
    "TileGridError",
    "InvalidRangeError",
    "InvalidDisplayHintsError",
    "SourceUnavailableError",
    "ViewCache",
    "FetchCoordinator",
    "SimulatedContentSource",
    "HttpContentSource",
    "ViewportLoader",
]
