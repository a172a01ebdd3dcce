"""Grid API endpoints.

Returns laid-out windows of a grid. A request that arrives while the grid
is already extending gets a busy response, which clients retry later.
"""

from dataclasses import replace
from typing import Optional

from fastapi import APIRouter, Query
from loguru import logger

from ..models import ApiResponse
from ..services.grid_service import get_grid_service
from ..utils import handle_api_errors


router = APIRouter()


@router.get("/{grid_id}/entries", response_model=ApiResponse)
@handle_api_errors("fetch grid entries")
async def get_entries(
    grid_id: str,
    start_index: int = Query(0),
    count: int = Query(10),
    tile_width: Optional[int] = Query(None),
    horizontal_separator: Optional[int] = Query(None),
    vertical_separator: Optional[int] = Query(None),
    columns: Optional[int] = Query(None),
) -> ApiResponse:
    """Make a window of the grid resident and return its entries."""
    service = get_grid_service()
    hints = service.default_hints()
    overrides = {
        "tile_width_pixels": tile_width,
        "horizontal_separator_pixels": horizontal_separator,
        "vertical_separator_pixels": vertical_separator,
        "number_of_columns": columns,
    }
    hints = replace(hints, **{k: v for k, v in overrides.items() if v is not None})

    result = await service.get_grid(grid_id).try_fetch(start_index, count, hints)
    if result.is_busy:
        return ApiResponse.busy()

    logger.debug(f"Grid '{grid_id}': returning {len(result.entries)} entries")
    return ApiResponse.success(
        data={
            "grid_id": grid_id,
            "entries": [entry.to_dict() for entry in result.entries],
        },
        message="Entries retrieved successfully",
    )


@router.get("/{grid_id}/stats", response_model=ApiResponse)
@handle_api_errors("get grid stats")
async def get_grid_stats(grid_id: str) -> ApiResponse:
    """Return counters and cache statistics for an existing grid."""
    coordinator = get_grid_service().find_grid(grid_id)
    if coordinator is None:
        return ApiResponse.error(message=f"Grid '{grid_id}' not found", code=404)
    return ApiResponse.success(
        data=coordinator.get_stats(),
        message="Grid statistics retrieved successfully",
    )


@router.delete("/{grid_id}", response_model=ApiResponse)
@handle_api_errors("drop grid")
async def drop_grid(grid_id: str) -> ApiResponse:
    """Forget a grid and its cached window."""
    if not get_grid_service().drop_grid(grid_id):
        return ApiResponse.error(message=f"Grid '{grid_id}' not found", code=404)
    return ApiResponse.success(message=f"Grid '{grid_id}' dropped")
