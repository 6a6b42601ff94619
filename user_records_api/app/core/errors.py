"""
Exception handlers that render every failure as the JSON error envelope.

The envelope has the shape::

    {"error": "...", "details": "...", "timestamp": "<ISO-8601>", "kind": "..."}

Service code raises ``UserRecordsError`` subclasses; the framework's own
HTTP errors (unknown route, wrong method) and unhandled exceptions are
mapped onto the same shape here.  Request bodies are decoded by the
handlers themselves, so FastAPI's own validation errors never occur.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import UserNotFoundError, UserRecordsError
from ..schemas.user import ErrorEnvelope

logger = logging.getLogger(__name__)


def error_envelope(kind: str, error: str, details: Any) -> Dict[str, Any]:
    """Build the JSON-ready error body stamped with the current UTC time."""
    return ErrorEnvelope(
        kind=kind,
        error=error,
        details="" if details is None else str(details),
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


def error_response(exc: UserRecordsError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.kind, exc.message, exc.details),
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Register the envelope-producing exception handlers on ``app``."""

    @app.exception_handler(UserRecordsError)
    async def user_records_exception_handler(request: Request, exc: UserRecordsError):
        logger.warning(
            "%s %s rejected: %s (%s)", request.method, request.url.path, exc.kind, exc.details
        )
        return error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Unknown routes and disallowed methods."""
        if exc.status_code == 404:
            return error_response(UserNotFoundError(details=str(exc.detail)))
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope("HTTPError", str(exc.detail), ""),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all for unhandled exceptions; the cause goes into ``details``."""
        logger.error(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=error_envelope("InternalFailure", "internal failure", exc),
        )
