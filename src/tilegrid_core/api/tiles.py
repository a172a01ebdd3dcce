"""Tiles API endpoints.

Serves raw content records by absolute index, the way the grid's
HttpContentSource expects them.
"""

from fastapi import APIRouter, Query

from ..exceptions import InvalidRangeError
from ..models import ApiResponse
from ..services.grid_service import get_grid_service
from ..utils import handle_api_errors


router = APIRouter()


@router.get("/", response_model=ApiResponse)
# Also handle path without trailing slash
@router.get("", response_model=ApiResponse)
@handle_api_errors("fetch tiles")
async def list_tiles(
    start_index: int = Query(0, alias="startIndex"),
    number_of_tiles: int = Query(10, alias="numberOfTiles"),
) -> ApiResponse:
    """Return up to numberOfTiles records starting at startIndex."""
    if number_of_tiles < 0:
        raise InvalidRangeError(start_index, number_of_tiles)

    records = await get_grid_service().tile_backend.fetch_range(start_index, number_of_tiles)

    return ApiResponse.success(
        data={
            "start_index": max(0, start_index),
            "tiles": [record.to_dict() for record in records],
        },
        message="Tiles retrieved successfully",
    )
