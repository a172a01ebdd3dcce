"""Error handling utilities for the tilegrid-core server."""

from loguru import logger
import functools
from typing import Callable, Any, Awaitable

from fastapi import HTTPException

from ..exceptions import (
    InvalidDisplayHintsError,
    InvalidRangeError,
    SourceUnavailableError,
)
from ..models.core import ApiResponse, ErrorDetail


def handle_api_errors(operation_name: str) -> Callable[[Callable[..., Awaitable[ApiResponse]]], Callable[..., Awaitable[ApiResponse]]]:
    """Decorator to handle API errors.

    This decorator converts the tilegrid error taxonomy to API responses:
    invalid requests give 400, an unavailable source gives 503 and
    anything else gives 500.

    Args:
        operation_name: Name of the operation for logging purposes

    Returns:
        The decorated function
    """
    def decorator(func: Callable[..., Awaitable[ApiResponse]]) -> Callable[..., Awaitable[ApiResponse]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> ApiResponse:
            try:
                return await func(*args, **kwargs)
            except HTTPException as e:
                # Let FastAPI handle HTTP exceptions
                raise e
            except InvalidRangeError as e:
                return ApiResponse.error(
                    message=f"Failed to {operation_name}: invalid range",
                    code=400,
                    errors=[ErrorDetail(field="range", message=str(e))],
                )
            except InvalidDisplayHintsError as e:
                return ApiResponse.error(
                    message=f"Failed to {operation_name}: invalid display hints",
                    code=400,
                    errors=[ErrorDetail(field="display_hints", message=str(e))],
                )
            except SourceUnavailableError as e:
                logger.error(f"Failed to {operation_name}: {str(e)}")
                return ApiResponse.error(
                    message=f"Failed to {operation_name}: content source unavailable",
                    code=503,
                    errors=[ErrorDetail(field="source", message=str(e))],
                )
            except Exception as e:
                logger.error(f"Failed to {operation_name}: {str(e)}")
                return ApiResponse.error(
                    message=f"Failed to {operation_name}",
                    errors=[ErrorDetail(field="general", message=str(e))],
                )
        return wrapper
    return decorator
