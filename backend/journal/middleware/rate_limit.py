# backend/journal/middleware/rate_limit.py
"""
Per-client request limits (slowapi).

Limits per endpoint group live in journal/services/constants.py; analytics
gets the tightest one because every call re-reads the owner's full history.
Counters are kept in memory, which is enough for a single API instance.
RATE_LIMIT_ENABLED=false switches the limiter off; the test environment
always does.

Usage:
    @router.post("/")
    @limiter.limit(RATE_LIMIT_WRITE)
    def create_trade(request: Request, ...):
        ...
"""

import logging

from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from journal.config import settings
from journal.schemas.errors import ErrorDetail
from journal.services.constants import (
    RATE_LIMIT_ANALYTICS,
    RATE_LIMIT_DEFAULT,
    RATE_LIMIT_HEALTH,
    RATE_LIMIT_WRITE,
)

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 60


def _get_client_ip(request: Request) -> str:
    """
    Rate-limit key for a request.

    X-Forwarded-For (first hop) or X-Real-IP is used only when the socket
    peer is a configured proxy, or TRUST_PROXY_HEADERS is on; otherwise a
    client could pick its own key.
    """
    peer = get_remote_address(request)
    if settings.trust_proxy_headers or peer in settings.trusted_proxy_ips:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip
    return peer


limiter = Limiter(
    key_func=_get_client_ip,
    default_limits=[RATE_LIMIT_DEFAULT],
    enabled=settings.rate_limit_enabled,
)


async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """429 in the usual error shape, with Retry-After."""
    limit = str(exc.detail) if exc.detail else "rate limit exceeded"
    logger.warning(f"Client {_get_client_ip(request)} throttled: {limit}")

    body = ErrorDetail(
        error="RateLimitError",
        message=f"Too many requests ({limit}). Retry in {RETRY_AFTER_SECONDS} seconds.",
        details={"retry_after": RETRY_AFTER_SECONDS},
    )
    return JSONResponse(
        status_code=429,
        content=body.model_dump(),
        headers={"Retry-After": str(RETRY_AFTER_SECONDS)},
    )


__all__ = [
    "limiter",
    "rate_limit_exceeded_handler",
    "SlowAPIMiddleware",
    "RATE_LIMIT_DEFAULT",
    "RATE_LIMIT_WRITE",
    "RATE_LIMIT_HEALTH",
    "RATE_LIMIT_ANALYTICS",
]
