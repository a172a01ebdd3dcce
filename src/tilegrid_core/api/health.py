"""Health API endpoints."""

from fastapi import APIRouter
from ..models import ApiResponse
from ..services.base_service import ServiceRegistry
from ..services.grid_service import get_grid_service


router = APIRouter()


@router.get("/", response_model=ApiResponse)
# Also handle path without trailing slash
@router.get("", response_model=ApiResponse)
async def health_check() -> ApiResponse:
    """Check the health of the server and report grid statistics."""
    services = {
        name: service.is_initialized()
        for name, service in ServiceRegistry.get_all().items()
    }
    return ApiResponse.success(
        data={"status": "ok", "services": services, "stats": get_grid_service().get_stats()},
        message="Server is healthy",
    )
