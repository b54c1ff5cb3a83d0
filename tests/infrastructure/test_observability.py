"""Structured Logging - JSON formatter output shape."""

import json
import logging
import sys

from valkey_rest.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "valkey_rest.test", logging.WARNING, __file__, 1, "rejected %s", ("x",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "valkey_rest.test"
    assert payload["message"] == "rejected x"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    payload = json.loads(JSONFormatter().format(
        _record(path="/keys/a", error_code="KEY_NOT_FOUND", authorization="Bearer s"),
    ))
    assert payload["path"] == "/keys/a"
    assert payload["error_code"] == "KEY_NOT_FOUND"
    assert "authorization" not in payload


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord(
            "x", logging.ERROR, __file__, 1, "failed", None, sys.exc_info(),
        )
    payload = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in payload["exception"]


def test_setup_logging_sets_level_and_formatter():
    original_handlers = list(logging.root.handlers)
    original_level = logging.root.level
    try:
        setup_logging("debug", "json")
        assert logging.root.level == logging.DEBUG
        assert isinstance(logging.root.handlers[-1].formatter, JSONFormatter)
    finally:
        logging.root.handlers = original_handlers
        logging.root.setLevel(original_level)
