# backend/journal/utils/__init__.py
"""
Utility modules for the Trade Journal.

Cross-cutting utilities used throughout the application:
- logging: Logging configuration with correlation ID support
- context: Request-scoped context (correlation ID, owner ID)
- sql: SQL query construction helpers (LIKE escaping)

Usage:
    from journal.utils import setup_logging
    from journal.utils import get_correlation_id, set_correlation_id
    from journal.utils import escape_like_pattern
"""

from journal.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
    get_owner_id,
    set_owner_id,
    clear_owner_id,
)
from journal.utils.logging import setup_logging
from journal.utils.sql import escape_like_pattern, LIKE_ESCAPE_CHAR

__all__ = [
    # Logging
    "setup_logging",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "get_owner_id",
    "set_owner_id",
    "clear_owner_id",
    # SQL
    "escape_like_pattern",
    "LIKE_ESCAPE_CHAR",
]
