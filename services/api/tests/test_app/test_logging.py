"""Tests for structured JSON logging."""

import json
import logging
import sys

from tracker_api.logging import JSONLogFormatter, RequestIDFilter, request_id_var


def _record(message: str, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("tracker_core.assembler", logging.INFO, __file__, 1, message, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json() -> None:
    line = JSONLogFormatter(service="api").format(_record("Parsed tracker", doc_id="abc", sheet_type="best"))
    entry = json.loads(line)
    assert entry["level"] == "INFO"
    assert entry["service"] == "api"
    assert entry["logger"] == "tracker_core.assembler"
    assert entry["message"] == "Parsed tracker"
    assert entry["doc_id"] == "abc"
    assert entry["sheet_type"] == "best"
    assert "request_id" not in entry


def test_formatter_includes_exception() -> None:
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), None)
        record.exc_info = sys.exc_info()
    entry = json.loads(JSONLogFormatter().format(record))
    assert "ValueError: boom" in entry["exception"]


def test_request_id_filter() -> None:
    token = request_id_var.set("req-1")
    try:
        record = _record("hello")
        assert RequestIDFilter().filter(record) is True
        assert record.request_id == "req-1"
    finally:
        request_id_var.reset(token)
