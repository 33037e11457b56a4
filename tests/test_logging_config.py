"""Tests for structured JSON logging."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from scoreboard_api.logging_config import (
    QUIET_LOGGERS,
    JSONFormatter,
    configure_logging,
    resolve_log_level,
)


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="scoreboard_api.events.selection",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def formatter() -> JSONFormatter:
    return JSONFormatter(service="scoreboard-api", environment="test")


class TestJSONFormatter:
    def test_base_fields(self, formatter):
        payload = json.loads(formatter.format(_record("Selected top events")))
        assert payload["message"] == "Selected top events"
        assert payload["level"] == "info"
        assert payload["logger"] == "scoreboard_api.events.selection"
        assert payload["service"] == "scoreboard-api"
        assert payload["environment"] == "test"
        assert payload["timestamp"].endswith("+00:00")
        assert "pathname" not in payload
        assert "context" not in payload

    def test_ranking_fields_promoted(self, formatter):
        record = _record("Skipping malformed event", league="NBA", event_id="nba-4", error="bad")
        payload = json.loads(formatter.format(record))
        assert payload["league"] == "NBA"
        assert payload["event_id"] == "nba-4"
        assert payload["context"] == {"error": "bad"}

    def test_request_fields(self, formatter):
        record = _record("request", path="/important", status_code=200, duration_ms=1.5)
        payload = json.loads(formatter.format(record))
        assert payload["path"] == "/important"
        assert payload["context"] == {"status_code": 200, "duration_ms": 1.5}

    def test_unserializable_extra_stringified(self, formatter):
        payload = json.loads(formatter.format(_record("pooled", leagues={"NBA"})))
        assert payload["context"]["leagues"] == "{'NBA'}"

    def test_exception_included(self, formatter):
        try:
            raise RuntimeError("upstream down")
        except RuntimeError:
            record = _record("failed")
            record.exc_info = sys.exc_info()
        payload = json.loads(formatter.format(record))
        assert "upstream down" in payload["exception"]


class TestLogLevel:
    @pytest.mark.parametrize(
        ("level", "environment", "expected"),
        [
            (None, "production", logging.INFO),
            (None, "staging", logging.INFO),
            (None, "development", logging.DEBUG),
            ("warning", "production", logging.WARNING),
            (" error ", "development", logging.ERROR),
            ("bogus", "development", logging.INFO),
        ],
    )
    def test_resolve_log_level(self, level, environment, expected):
        assert resolve_log_level(level, environment) == expected

    def test_configure_logging(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        saved_quiet = {name: logging.getLogger(name).level for name in QUIET_LOGGERS}
        try:
            configure_logging("scoreboard-api", "production")
            assert root.level == logging.INFO
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)
            for name, level in saved_quiet.items():
                logging.getLogger(name).setLevel(level)
