# backend/journal/middleware/correlation.py
"""
Request tracing middleware.

Each request gets one correlation ID, taken from the caller when it sends
one and generated otherwise. The ID is stored in the request context (so
every log record of the request carries it) and echoed back in the
X-Correlation-ID response header, errors included.

Header precedence: X-Correlation-ID, then X-Request-ID, then a fresh UUID4.
"""

import uuid
from typing import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from journal.utils.context import (
    clear_correlation_id,
    clear_owner_id,
    set_correlation_id,
)

CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Inbound headers checked in order
_INBOUND_HEADERS = (CORRELATION_ID_HEADER, REQUEST_ID_HEADER)


def resolve_correlation_id(request: Request) -> str:
    """Return the caller's trace ID, or a new UUID4 when none was sent."""
    for header in _INBOUND_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Bind a correlation ID to the request and echo it in the response.

    Request context (correlation ID and owner ID) is reset once the
    response has been produced.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        correlation_id = resolve_correlation_id(request)
        set_correlation_id(correlation_id)
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
            clear_owner_id()

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
