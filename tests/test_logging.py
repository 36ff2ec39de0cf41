import json
import logging

from dashboard.logging_config import (
    JSONFormatter,
    configure_logging,
    correlation_id,
    get_correlation_id,
)


def test_json_formatter():
    formatter = JSONFormatter()
    record = logging.LogRecord("test", logging.INFO, "", 0, "hello world", (), None)
    output = formatter.format(record)
    parsed = json.loads(output)
    assert parsed["message"] == "hello world"
    assert parsed["level"] == "INFO"
    assert parsed["service"] == "listings-dashboard"
    assert "timestamp" in parsed
    assert "data" not in parsed


def test_json_formatter_extra_data():
    formatter = JSONFormatter()
    record = logging.LogRecord("test", logging.WARNING, "", 0, "rejected %s", ("query",), None)
    record.extra_data = {"path": "/listings"}
    parsed = json.loads(formatter.format(record))
    assert parsed["message"] == "rejected query"
    assert parsed["data"] == {"path": "/listings"}


def test_configure_logging():
    configure_logging(level="DEBUG", fmt="text")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    configure_logging(level="INFO", fmt="json")
    assert isinstance(root.handlers[0].formatter, JSONFormatter)


def test_correlation_id():
    correlation_id.set("test-123")
    assert correlation_id.get() == "test-123"
    assert get_correlation_id() == "test-123"
    correlation_id.set("")
    generated = get_correlation_id()
    assert len(generated) == 12
    correlation_id.set("")
