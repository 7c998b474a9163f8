# backend/tests/test_correlation_id.py
"""
Tests for correlation ID middleware, request context and log formatting.
"""

import json
import logging

from conftest import owner_headers
from journal.utils.context import (
    clear_correlation_id,
    clear_owner_id,
    get_correlation_id,
    get_owner_id,
    set_correlation_id,
    set_owner_id,
)
from journal.utils.logging import (
    NO_CORRELATION_ID,
    CorrelationIdFilter,
    JsonFormatter,
)


class TestRequestContext:
    """Tests for the contextvar helpers."""

    def test_get_returns_none_when_not_set(self):
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_set_and_get_correlation_id(self):
        set_correlation_id("test-correlation-123")
        assert get_correlation_id() == "test-correlation-123"
        clear_correlation_id()

    def test_clear_correlation_id(self):
        set_correlation_id("test-correlation-456")
        clear_correlation_id()
        assert get_correlation_id() is None

    def test_owner_id(self):
        set_owner_id("trader-9")
        assert get_owner_id() == "trader-9"
        clear_owner_id()
        assert get_owner_id() is None


class TestLogRecords:
    """Tests for CorrelationIdFilter and JsonFormatter."""

    def _record(self, message: str = "Trade 1 recorded") -> logging.LogRecord:
        return logging.LogRecord(
            name="journal.routers.trades",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg=message,
            args=(),
            exc_info=None,
        )

    def test_filter_adds_placeholder_without_request(self):
        clear_correlation_id()
        clear_owner_id()
        record = self._record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == NO_CORRELATION_ID
        assert record.owner_id is None

    def test_json_formatter_includes_context(self):
        set_correlation_id("abc-123")
        set_owner_id("trader-1")
        try:
            record = self._record()
            CorrelationIdFilter().filter(record)
            entry = json.loads(JsonFormatter().format(record))
        finally:
            clear_correlation_id()
            clear_owner_id()

        assert entry["correlation_id"] == "abc-123"
        assert entry["owner_id"] == "trader-1"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "journal.routers.trades"
        assert entry["message"] == "Trade 1 recorded"

    def test_json_formatter_keeps_extra_fields(self):
        record = self._record()
        record.trade_id = 42
        CorrelationIdFilter().filter(record)

        entry = json.loads(JsonFormatter().format(record))

        assert entry["extra"] == {"trade_id": 42}


class TestCorrelationIdMiddleware:
    """Tests for correlation ID middleware."""

    def test_generates_correlation_id_when_not_provided(self, client):
        response = client.get("/health/live")

        assert response.status_code == 200
        correlation_id = response.headers["X-Correlation-ID"]
        assert len(correlation_id) == 36  # UUID length
        assert correlation_id.count("-") == 4

    def test_uses_provided_correlation_id(self, client):
        response = client.get("/health/live", headers={"X-Correlation-ID": "my-trace-123"})

        assert response.headers["X-Correlation-ID"] == "my-trace-123"

    def test_uses_request_id_header_as_fallback(self, client):
        response = client.get("/health/live", headers={"X-Request-ID": "my-request-456"})

        assert response.headers["X-Correlation-ID"] == "my-request-456"

    def test_prefers_correlation_id_over_request_id(self, client):
        response = client.get(
            "/health/live",
            headers={"X-Correlation-ID": "correlation-123", "X-Request-ID": "request-456"},
        )

        assert response.headers["X-Correlation-ID"] == "correlation-123"

    def test_error_responses_include_correlation_id(self, client):
        response = client.get("/trades/99999", headers=owner_headers())

        assert response.status_code == 404
        assert "X-Correlation-ID" in response.headers

    def test_different_requests_get_different_ids(self, client):
        id1 = client.get("/health/live").headers["X-Correlation-ID"]
        id2 = client.get("/health/live").headers["X-Correlation-ID"]

        assert id1 != id2
