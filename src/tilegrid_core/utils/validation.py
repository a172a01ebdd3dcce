"""Validation utilities for tilegrid-core requests."""

from ..exceptions import InvalidRangeError
from ..models.core import DisplayHints


def validate_range(start_index: int, count: int) -> None:
    """Reject a negative start or a non-positive count.

    Raises:
        InvalidRangeError: If the range can never be served
    """
    if start_index < 0 or count <= 0:
        raise InvalidRangeError(start_index, count)


def validate_display_hints(hints: DisplayHints) -> DisplayHints:
    """Check that hints can produce a layout.

    Raises:
        InvalidDisplayHintsError: If any value is out of range
    """
    return hints.validate()
