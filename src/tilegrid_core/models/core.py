"""Core model classes and types for tilegrid-core.

This module contains the core data models used throughout the package:
content records from the source, positioned entries owned by the cache,
display hints, the tagged fetch result and the API response envelope.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from pydantic import BaseModel
from enum import Enum

from ..exceptions import InvalidDisplayHintsError


class FetchStatus(str, Enum):
    """Outcome of a single-flight fetch attempt."""

    READY = "ready"
    BUSY = "busy"


@dataclass(frozen=True)
class ContentRecord:
    """Immutable content for one tile, independent of layout."""
    height_in_pixels: int
    text: str

    def __post_init__(self):
        if self.height_in_pixels <= 0:
            raise ValueError(
                f"height_in_pixels must be positive, got {self.height_in_pixels}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContentRecord":
        """Build a record from wire keys (heightInPixels) or snake-case keys."""
        if "heightInPixels" in data:
            height = data["heightInPixels"]
        else:
            height = data["height_in_pixels"]
        return cls(height_in_pixels=int(height), text=str(data.get("text", "")))

    def to_dict(self) -> Dict[str, Any]:
        return {"heightInPixels": self.height_in_pixels, "text": self.text}


@dataclass(frozen=True)
class DisplayHints:
    """View-specific values used to lay out tiles.

    Constant for the lifetime of one cache.
    """
    tile_width_pixels: int
    horizontal_separator_pixels: int
    vertical_separator_pixels: int
    number_of_columns: int

    def validate(self) -> "DisplayHints":
        """Raise InvalidDisplayHintsError if these hints cannot be laid out."""
        if self.number_of_columns <= 0:
            raise InvalidDisplayHintsError(
                f"number_of_columns must be positive, got {self.number_of_columns}")
        if self.tile_width_pixels <= 0:
            raise InvalidDisplayHintsError(
                f"tile_width_pixels must be positive, got {self.tile_width_pixels}")
        if self.horizontal_separator_pixels < 0 or self.vertical_separator_pixels < 0:
            raise InvalidDisplayHintsError("separators must not be negative")
        return self

    def column_x(self, column: int) -> int:
        """Pixel x offset of a column."""
        return column * (self.tile_width_pixels + self.horizontal_separator_pixels)


@dataclass(frozen=True)
class PositionedEntry:
    """A content record plus its column and pixel position in the grid."""
    record: ContentRecord
    column: int
    x: int
    y: int
    index: int

    @property
    def height(self) -> int:
        return self.record.height_in_pixels

    @property
    def bottom(self) -> int:
        return self.y + self.record.height_in_pixels

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "column": self.column,
            "x": self.x,
            "y": self.y,
            "tile": self.record.to_dict(),
        }


@dataclass
class FetchResult:
    """Tagged result of FetchCoordinator.try_fetch.

    A busy result is never the same thing as a ready result with no entries.
    """
    status: FetchStatus
    entries: List[PositionedEntry] = field(default_factory=list)

    @classmethod
    def ready(cls, entries: List[PositionedEntry]) -> "FetchResult":
        return cls(status=FetchStatus.READY, entries=list(entries))

    @classmethod
    def busy(cls) -> "FetchResult":
        return cls(status=FetchStatus.BUSY)

    @property
    def is_busy(self) -> bool:
        return self.status == FetchStatus.BUSY


class ErrorDetail(BaseModel):
    """Error detail model."""

    field: str
    message: str


class ApiResponse(BaseModel):
    """API response model."""

    status: str
    code: int
    data: Optional[Dict[str, Any]] = None
    message: str
    errors: Optional[List[ErrorDetail]] = None

    @classmethod
    def success(cls, data: Optional[Dict[str, Any]] = None, message: str = "Success") -> "ApiResponse":
        """Create a success response."""
        return cls(
            status="success",
            code=200,
            data=data,
            message=message,
            errors=None,
        )

    @classmethod
    def busy(cls, message: str = "A fetch is already in progress, retry later") -> "ApiResponse":
        """Create a busy response. Busy is a contention signal, not an error."""
        return cls(
            status="busy",
            code=202,
            data=None,
            message=message,
            errors=None,
        )

    @classmethod
    def error(cls, message: str, code: int = 500, errors: Optional[List[ErrorDetail]] = None) -> "ApiResponse":
        """Create an error response."""
        if errors is None:
            errors = [ErrorDetail(field="general", message=message)]

        return cls(
            status="error",
            code=code,
            data=None,
            message=message,
            errors=errors,
        )
