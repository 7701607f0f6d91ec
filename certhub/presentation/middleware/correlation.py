"""
Per-request correlation id.

Taken from ``X-Request-ID`` or ``X-Correlation-ID`` when the caller sends
one and generated otherwise. It is attached to every log record and SQL
statement of the request and echoed in both response headers.
"""

from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ...infrastructure.logging import Timer, set_correlation_id

logger = structlog.get_logger()

ID_HEADERS = ("X-Request-ID", "X-Correlation-ID")


def _incoming_id(request: Request) -> str | None:
    for header in ID_HEADERS:
        if value := request.headers.get(header):
            return value
    return None


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = _incoming_id(request) or str(uuid4())
        set_correlation_id(request_id)

        with structlog.contextvars.bound_contextvars(method=request.method, path=request.url.path):
            with Timer() as t:
                response = await call_next(request)
            logger.info("Request completed", status_code=response.status_code, duration_ms=t.duration_ms)

        for header in ID_HEADERS:
            response.headers[header] = request_id
        return response
