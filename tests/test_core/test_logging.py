"""JSON log records carry the request trace id and request extras."""
import json
import logging

from app.core.logging import JSONFormatter, correlation_id_var, get_correlation_id, set_correlation_id


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("app.test", logging.INFO, __file__, 10, "Property %s created", ("p1",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_set_correlation_id_generates_when_missing():
    token = correlation_id_var.set("")
    try:
        cid = set_correlation_id()
        assert cid
        assert get_correlation_id() == cid
        assert set_correlation_id("abc-123") == "abc-123"
        assert get_correlation_id() == "abc-123"
    finally:
        correlation_id_var.reset(token)


def test_formatter_includes_trace_id_and_extras():
    token = correlation_id_var.set("trace-42")
    try:
        entry = json.loads(JSONFormatter().format(_record(status=201, duration=0.0123, path="/api/v1/properties/sale")))
    finally:
        correlation_id_var.reset(token)

    assert entry["message"] == "Property p1 created"
    assert entry["level"] == "INFO"
    assert entry["correlation_id"] == "trace-42"
    assert entry["status"] == "201"
    assert entry["duration"] == "0.0123"
    assert entry["path"] == "/api/v1/properties/sale"
    assert "user_id" not in entry


def test_formatter_omits_empty_trace_id():
    token = correlation_id_var.set("")
    try:
        entry = json.loads(JSONFormatter().format(_record()))
    finally:
        correlation_id_var.reset(token)
    assert "correlation_id" not in entry
