"""API error types and their JSON rendering."""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from kinowoche.schemas.responses import ErrorResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """
    Error surfaced to the client as {"ok": false, "error": ..., "details": ...}.

    `error` is a stable, machine-checkable reason string.
    """

    def __init__(self, status_code: int, error: str, details: Any = None) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details


class ProviderError(ApiError):
    """An upstream provider failed; its payload is passed through as details."""

    def __init__(self, status_code: int, details: Any = None, provider: str = "serpapi") -> None:
        super().__init__(status_code, f"{provider}_error", details)


def error_response(status_code: int, error: str, details: Any = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render ApiError and its subclasses."""
    if exc.status_code >= 500:
        logger.warning(f"{request.url.path}: {exc.error} ({exc.status_code})")
    return error_response(exc.status_code, exc.error, exc.details)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected errors: log and answer a generic 500."""
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
    return error_response(500, "server_error", str(exc))
