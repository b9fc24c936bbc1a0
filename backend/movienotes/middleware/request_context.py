"""
MovieNotes Backend: Request Context Middleware
===============================================

What:  Tags every request with a correlation ID and writes one access line
       when it finishes.
How:   The ID comes from the client's X-Request-ID header or is generated,
       is stored on request.state and in a ContextVar (read by the exception
       handlers in main.py), and is echoed in the response header.
When:  Outermost application middleware, so error responses carry the ID too.

Access log levels:
    5xx                        → ERROR
    4xx                        → WARNING
    POST / DELETE (mutations)  → INFO
    everything else (reads,
    health probes, preflights) → DEBUG

Line format:
    DELETE /movies/550 -> 200 (2.4 ms) rid=3f9c0a7be21d
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("movienotes.access")

REQUEST_ID_HEADER = "X-Request-ID"

_MUTATING_METHODS = frozenset({"POST", "DELETE"})

# Current request's ID for code without access to the Request object
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def _access_level(method: str, status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    if method in _MUTATING_METHODS:
        return logging.INFO
    return logging.DEBUG


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID and logs the outcome of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        request_id_var.set(request.state.request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            # The catch-all handler answers outside this middleware
            logger.error(
                "%s %s -> unhandled error rid=%s",
                request.method,
                request.url.path,
                request.state.request_id,
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        logger.log(
            _access_level(request.method, response.status_code),
            "%s %s -> %d (%.1f ms) rid=%s",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            request.state.request_id,
        )
        return response
