"""Models package for tilegrid-core.

Re-exports the core data models and the API response envelope.
"""

from .core import (
    # Grid data models
    ContentRecord,
    DisplayHints,
    PositionedEntry,

    # Fetch results
    FetchStatus,
    FetchResult,

    # API response models
    ErrorDetail,
    ApiResponse,
)

__all__ = [
    "ContentRecord",
    "DisplayHints",
    "PositionedEntry",
    "FetchStatus",
    "FetchResult",
    "ErrorDetail",
    "ApiResponse",
]
