"""Tests for correlation ID tracking and log helpers."""

import logging
import uuid
from datetime import datetime, timezone

from lockedin.boundary.db.models import SessionType
from lockedin.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from lockedin.observability.log_utils import log_with_context, safe_log_value
from lockedin.observability.logger import CorrelationIdFilter


class TestCorrelationId:

    def test_generates_id_when_missing(self) -> None:
        value = set_correlation_id()
        try:
            assert uuid.UUID(value)
            assert get_correlation_id() == value
        finally:
            clear_correlation_id()

    def test_keeps_supplied_id(self) -> None:
        set_correlation_id("req-123")
        try:
            assert get_correlation_id() == "req-123"
        finally:
            clear_correlation_id()
        assert get_correlation_id() == ""

    def test_filter_injects_id(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        set_correlation_id("req-456")
        try:
            CorrelationIdFilter().filter(record)
        finally:
            clear_correlation_id()

        assert record.correlation_id == "req-456"

    def test_filter_uses_dash_outside_request(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "-"


class TestSafeLogValue:

    def test_renders_domain_values(self) -> None:
        session_id = uuid.uuid4()

        assert safe_log_value(session_id) == str(session_id)
        assert safe_log_value(SessionType.POMODORO) == "pomodoro"
        assert safe_log_value(datetime(2025, 1, 1, tzinfo=timezone.utc)) == "2025-01-01T00:00:00+00:00"
        assert safe_log_value(["exam", "math"]) == "[exam, math]"
        assert safe_log_value({"a": 1}) == "dict(1 keys)"
        assert safe_log_value(None) == "None"

    def test_long_lists_are_counted(self) -> None:
        assert safe_log_value(list(range(20))) == "list(20 items)"

    def test_truncates(self) -> None:
        assert safe_log_value("x" * 600).startswith("x" * 500 + "... (truncated")

    def test_log_with_context(self, caplog) -> None:
        logger = logging.getLogger("lockedin.test")
        session_id = uuid.uuid4()

        with caplog.at_level(logging.INFO, logger="lockedin.test"):
            log_with_context(logger, logging.INFO, "Tagged", session_id=session_id, tags=["math"])

        record = caplog.records[-1]
        assert record.session_id == str(session_id)
        assert record.tags == "[math]"
