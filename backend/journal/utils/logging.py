# backend/journal/utils/logging.py
"""
Logging configuration for the Trade Journal.

One stdout handler on the root logger, configured once at startup:
- Level taken from LOG_LEVEL
- Every record tagged with the request's correlation ID and owner ID
- LOG_FORMAT=json emits one JSON object per line for log shippers
- SQLAlchemy/httpx chatter held at WARNING

Usage:
    from journal.utils import setup_logging

    setup_logging()           # main.py, before the app is created

What gets logged where:
    DEBUG   - Individual valuations, singleton creation
    INFO    - Trades recorded/updated/deleted, analytics summaries
    WARNING - Rejected trade input, unknown trades, rate limit hits
    ERROR   - Database unavailable, unhandled service errors

Example text line:
    2024-01-08 14:30:00 | INFO     | 3f2a...c1 | journal.routers.trades | Trade 12 recorded: long pnl=50
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from journal.config import settings
from journal.utils.context import get_correlation_id, get_owner_id

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Placeholder for records emitted outside a request (startup, scripts)
NO_CORRELATION_ID = "no-correlation-id"

# Third-party loggers capped at WARNING
NOISY_LOGGERS = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "httpx",
    "httpcore",
    "multipart",
    "asyncio",
)

# Attributes every LogRecord carries; anything else came in via `extra=`
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "correlation_id", "owner_id"}


class CorrelationIdFilter(logging.Filter):
    """Stamp each record with the current correlation ID and owner ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        record.owner_id = get_owner_id()
        return True


class JsonFormatter(logging.Formatter):
    """
    Render a record as a single JSON line.

    Keys: timestamp, level, logger, correlation_id, message, plus owner_id
    inside a request, exception when exc_info is set, and extra for any
    `extra=` fields (values that are not JSON-serializable are str()'d).
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", NO_CORRELATION_ID),
            "message": record.getMessage(),
        }

        owner_id = getattr(record, "owner_id", None)
        if owner_id is not None:
            payload["owner_id"] = owner_id

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        extra = {
            key: _json_safe(value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS
        }
        if extra:
            payload["extra"] = extra

        return json.dumps(payload)


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
        quiet_third_party: bool = True,
) -> None:
    """
    Install the journal's handler on the root logger.

    Safe to call more than once; previous root handlers are replaced.

    Args:
        level: Level name, defaults to settings.log_level
        log_format: "text" or "json", defaults to settings.log_format
        quiet_third_party: Cap NOISY_LOGGERS at WARNING

    Raises:
        ValueError: If the level name is unknown
    """
    level_name = (level or settings.log_level).strip().upper()
    numeric_level = _get_log_level(level_name)
    format_type = (log_format or settings.log_format).lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    if format_type == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    if quiet_third_party:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={level_name}, format={format_type}"
    )


def _get_log_level(level_name: str) -> int:
    """Map a level name (case-insensitive, WARN allowed) to its number."""
    levels = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    try:
        return levels[level_name.strip().upper()]
    except KeyError:
        raise ValueError(
            f"Unknown log level {level_name!r}; expected one of {', '.join(levels)}"
        ) from None
