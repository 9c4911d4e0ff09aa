"""
Global exception handlers.

Anything the contact route does not turn into a response itself still leaves
the API in the ``{ok, error, details?}`` JSON shape:

- Starlette HTTP errors (unknown path, etc.) keep their status code
- Unhandled exceptions become a generic 500; the traceback is logged
  server-side only

Usage:
    # In main.py
    from app.core.errors import register_exception_handlers
    register_exception_handlers(app)
"""

import logging
import traceback
from typing import Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.schemas.contact import ContactResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"
METHOD_NOT_ALLOWED = "Method not allowed"
ALLOWED_METHODS_HEADER = {"Allow": "POST"}


def error_response(
    status_code: int,
    error: str,
    details: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    """Build a failure response in the contact API shape."""
    body = ContactResponse(ok=False, error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return error_response(405, METHOD_NOT_ALLOWED, headers=ALLOWED_METHODS_HEADER)
        detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return error_response(exc.status_code, detail, headers=exc.headers)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}:\n"
            f"{traceback.format_exc()}"
        )

        if settings.DEBUG:
            # Development: expose the exception type, never the message
            return error_response(500, INTERNAL_ERROR, details=type(exc).__name__)
        return error_response(500, INTERNAL_ERROR)
