# backend/journal/utils/context.py
"""
Request context for the Trade Journal.

Request-scoped values stored in contextvars:
- Correlation ID for request tracing
- Owner ID of the trader making the request (set by the owner dependency)

contextvars propagate through async/await and are isolated per request,
so the values never leak between concurrent requests.

Usage:
    from journal.utils.context import get_correlation_id, set_correlation_id

    # In middleware
    set_correlation_id("abc-123")

    # In any service/handler
    correlation_id = get_correlation_id()  # Returns "abc-123"
"""

from contextvars import ContextVar

# =============================================================================
# CONTEXT VARIABLES
# =============================================================================

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

_owner_id_var: ContextVar[str | None] = ContextVar("owner_id", default=None)


# =============================================================================
# CORRELATION ID
# =============================================================================

def get_correlation_id() -> str | None:
    """
    Get the current request's correlation ID.

    Returns:
        The correlation ID for the current request, or None if not set.
    """
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID for the current request.

    Called by CorrelationIdMiddleware at the start of each request.
    """
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID at the end of a request."""
    _correlation_id_var.set(None)


# =============================================================================
# OWNER ID
# =============================================================================

def get_owner_id() -> str | None:
    """Owner of the current request, or None outside an owner-scoped request."""
    return _owner_id_var.get()


def set_owner_id(owner_id: str) -> None:
    _owner_id_var.set(owner_id)


def clear_owner_id() -> None:
    _owner_id_var.set(None)
