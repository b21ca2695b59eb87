"""Error responses for the Web API.

Every handler maps data-layer failures to a 500 with a generic message and
missing rows to a 404. Both render as ``{"error": message}``.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class ApiError(Exception):
    """An error that is returned to the client as JSON."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class NotFoundError(ApiError):
    def __init__(self, entity: str):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{entity} not found")


class UnauthenticatedError(ApiError):
    def __init__(self):
        super().__init__(status.HTTP_401_UNAUTHORIZED, "Unauthenticated")


def data_error(event: str, message: str, exc: Exception) -> ApiError:
    """Log a data-layer failure and build the 500 response for it.

    Args:
        event: structlog event name (e.g. "students.fetch_failed")
        message: Client-facing message (e.g. "Failed to fetch students")
        exc: The original exception

    Returns:
        ApiError to raise from the handler
    """
    logger.error(event, error=str(exc), error_type=type(exc).__name__)
    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON handler for ApiError."""
    app.add_exception_handler(ApiError, _api_error_handler)
