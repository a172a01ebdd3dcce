"""Error taxonomy for tilegrid-core.

Busy is not an error and has no exception here; it is a FetchResult status.
Short reads are not errors either: they mark the end of the data.
"""


class TileGridError(Exception):
    """Base class for all tilegrid-core errors."""

    retryable = False


class InvalidRangeError(TileGridError, ValueError):
    """Raised when a caller asks for a negative start or a non-positive count."""

    def __init__(self, start_index: int, count: int):
        self.start_index = start_index
        self.count = count
        super().__init__(
            f"Invalid range: start_index={start_index}, count={count} "
            f"(start_index must be >= 0 and count must be > 0)")


class InvalidDisplayHintsError(TileGridError, ValueError):
    """Raised when display hints cannot produce a valid layout."""


class SourceUnavailableError(TileGridError):
    """Raised by a content source that could not deliver a range.

    Transient: callers may retry with backoff.
    """

    retryable = True

    def __init__(self, message: str, start_index: int = None, count: int = None):
        self.start_index = start_index
        self.count = count
        super().__init__(message)
