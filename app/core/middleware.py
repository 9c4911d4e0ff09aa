import logging
import time
import uuid

from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.core.errors import error_response

logger = logging.getLogger("contact_relay.requests")


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add X-Request-ID header for distributed tracing.

    If the client (or the API gateway) sends X-Request-ID, it is preserved.
    Otherwise, a new UUID is generated.

    The request ID is:
    - Available in request.state.request_id for logging
    - Returned in response headers for client correlation
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID")
        if not request_id:
            request_id = str(uuid.uuid4())

        request.state.request_id = request_id
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Request-ID"] = request_id

        logger.info(
            f"REQUEST | id={request_id} | method={request.method} | "
            f"path={request.url.path} | status={response.status_code} | "
            f"duration={process_time:.4f}s"
        )

        return response


class JSONCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware whose rejected preflights answer in the API's JSON shape
    instead of Starlette's plain-text body.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code < 400:
            return response

        reason = bytes(response.body).decode("utf-8", errors="replace")
        headers = {"Vary": response.headers["vary"]} if "vary" in response.headers else None
        return error_response(response.status_code, reason, headers=headers)

