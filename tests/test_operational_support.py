from __future__ import annotations

import json
import logging

import pytest

from core.exceptions import ValidationError
from infra.logging_config import resolve_log_level
from infra.operational_support import (
    REDACTED,
    REDACTED_EMAIL,
    OperationalSupport,
    TraceIdLogFilter,
    bind_trace_id,
    current_trace_id,
)


def test_operational_support_emits_redacted_structured_event(tmp_path):
    events_path = tmp_path / "support-events.jsonl"
    support = OperationalSupport(events_path=events_path)

    with bind_trace_id("trc-test-123"):
        trace_id = support.emit_event(
            event_type="support.test",
            message="token=abc123 alice@example.com",
            data={
                "password": "StrongPass123",
                "contact": "alice@example.com",
                "nested": {"api_token": "secret-value"},
            },
        )

    assert trace_id == "trc-test-123"
    rows = events_path.read_text(encoding="utf-8").splitlines()
    assert len(rows) == 1
    payload = json.loads(rows[0])
    assert payload["trace_id"] == "trc-test-123"
    assert payload["event_type"] == "support.test"
    assert "abc123" not in payload["message"]
    assert "alice@example.com" not in payload["message"]
    assert payload["data"]["password"] == REDACTED
    assert payload["data"]["nested"]["api_token"] == REDACTED
    assert payload["data"]["contact"] == REDACTED_EMAIL


def test_operational_support_capture_exception_records_crash_event(tmp_path):
    events_path = tmp_path / "support-events.jsonl"
    support = OperationalSupport(events_path=events_path)

    try:
        raise ValidationError("token=bad-token", code="COST_AMOUNT_INVALID")
    except ValidationError as exc:
        support.capture_exception(
            exc_type=ValidationError,
            exc_value=exc,
            exc_traceback=exc.__traceback__,
            context="unit-test",
            trace_id="trc-crash-1",
        )

    payload = json.loads(events_path.read_text(encoding="utf-8").splitlines()[0])
    assert payload["event_type"] == "app.crash"
    assert payload["level"] == "ERROR"
    assert payload["trace_id"] == "trc-crash-1"
    assert "bad-token" not in payload["message"]
    assert payload["data"]["exception_type"] == "ValidationError"
    assert payload["data"]["error_code"] == "COST_AMOUNT_INVALID"


def test_traced_command_records_start_and_finish_under_one_trace(tmp_path):
    support = OperationalSupport(events_path=tmp_path / "events.jsonl")

    with support.traced_command("summary", project_id="p-1") as trace_id:
        assert current_trace_id() == trace_id

    assert current_trace_id() is None
    events = support.read_events(trace_id=trace_id)
    assert [e["event_type"] for e in events] == ["cli.command.started", "cli.command.finished"]
    assert events[0]["data"]["params"] == {"project_id": "p-1"}


def test_traced_command_records_failure_and_reraises(tmp_path):
    support = OperationalSupport(events_path=tmp_path / "events.jsonl")

    with pytest.raises(ValidationError):
        with support.traced_command("add-cost"):
            raise ValidationError("bad amount", code="COST_AMOUNT_INVALID")

    events = support.read_events()
    assert [e["event_type"] for e in events] == ["cli.command.started", "cli.command.failed"]
    assert events[1]["level"] == "ERROR"
    assert events[1]["data"]["error_code"] == "COST_AMOUNT_INVALID"


def test_trace_id_filter_stamps_records():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
    with bind_trace_id("trc-log-1"):
        TraceIdLogFilter().filter(record)
    assert record.trace_id == "trc-log-1"

    TraceIdLogFilter().filter(record)
    assert record.trace_id == "-"


def test_resolve_log_level_reads_env(monkeypatch):
    monkeypatch.setenv("PB_LOG_LEVEL", "debug")
    assert resolve_log_level() == logging.DEBUG

    monkeypatch.setenv("PB_LOG_LEVEL", "chatty")
    assert resolve_log_level() == logging.INFO

    monkeypatch.delenv("PB_LOG_LEVEL", raising=False)
    assert resolve_log_level() == logging.INFO
