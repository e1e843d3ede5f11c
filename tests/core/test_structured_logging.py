"""JSON log output: one parseable object per record with context as keys."""

from __future__ import annotations

import json
import logging
import sys

from proficiency.core.logging import _ContainerFormatter, _JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="proficiency.services.attempt_ledger",
        level=logging.INFO,
        pathname="attempt_ledger.py",
        lineno=42,
        msg="Attempt recorded %s",
        args=("ok",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_produces_valid_json() -> None:
    parsed = json.loads(_JsonFormatter().format(_record()))
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "proficiency.services.attempt_ledger"
    assert parsed["message"] == "Attempt recorded ok"
    assert "timestamp" in parsed


def test_json_formatter_includes_request_fields() -> None:
    record = _record(request_id="abc-123", method="POST", path="/v1/assessment/submit")
    record.status_code = 201
    record.duration_ms = 12.5
    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["request_id"] == "abc-123"
    assert parsed["method"] == "POST"
    assert parsed["path"] == "/v1/assessment/submit"
    assert parsed["status_code"] == 201
    assert parsed["duration_ms"] == 12.5


def test_json_formatter_includes_assessment_fields() -> None:
    record = _record(user_id="u1", language="python", attempt_number=2)
    parsed = json.loads(_JsonFormatter().format(record))
    assert parsed["user_id"] == "u1"
    assert parsed["language"] == "python"
    assert parsed["attempt_number"] == 2


def test_json_formatter_omits_placeholder_request_id() -> None:
    parsed = json.loads(_JsonFormatter().format(_record(request_id="-")))
    assert "request_id" not in parsed


def test_json_formatter_includes_exception_info() -> None:
    try:
        raise ValueError("test error")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()
    parsed = json.loads(_JsonFormatter().format(record))
    assert "ValueError: test error" in parsed["exception"]


def test_container_formatter_is_not_json() -> None:
    output = _ContainerFormatter().format(_record())
    assert "INFO" in output
    assert "Attempt recorded ok" in output
    try:
        json.loads(output)
        raise AssertionError("Container format should not be valid JSON")
    except json.JSONDecodeError:
        pass
