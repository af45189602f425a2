"""Tests for structured logging."""

import json
import logging

from app.core.request_context import request_scope
from app.logging_config import ContextFilter, JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("app.test", logging.INFO, __file__, 10, "Lead created", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_extra_fields_are_emitted():
    payload = json.loads(JSONFormatter().format(_record(client_id="42", source="בוט")))

    assert payload["message"] == "Lead created"
    assert payload["severity"] == "INFO"
    assert payload["logger"] == "app.test"
    assert payload["client_id"] == "42"
    assert payload["source"] == "בוט"


def test_request_id_is_attached():
    record = _record()
    with request_scope("req-1"):
        ContextFilter().filter(record)

    assert json.loads(JSONFormatter().format(record))["request_id"] == "req-1"


def test_request_id_omitted_outside_requests():
    record = _record()
    ContextFilter().filter(record)

    assert "request_id" not in json.loads(JSONFormatter().format(record))
