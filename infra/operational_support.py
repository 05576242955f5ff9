from __future__ import annotations

import json
import logging
import os
import re
import traceback
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import date, datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, Iterator, Mapping

from infra.path import user_data_dir
from infra.version import get_app_version

logger = logging.getLogger(__name__)

REDACTED = "<redacted>"
REDACTED_EMAIL = "<redacted-email>"

# Command parameters may carry invitee emails or credentials for future backends.
_SENSITIVE_KEYS = re.compile(r"password|token|secret|api_?key|authorization|cookie")
_EMAIL = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_KEY_VALUE_SECRET = re.compile(r"(?i)\b(password|token|secret|api[_-]?key)\s*[:=]\s*[^\s,;]+")
_BEARER = re.compile(r"(?i)\bbearer\s+\S+")

_trace_id: ContextVar[str | None] = ContextVar("pb_trace_id", default=None)


def create_trace_id() -> str:
    return f"trc-{datetime.now(timezone.utc):%Y%m%d%H%M%S}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    return (_trace_id.get() or "").strip() or None


@contextmanager
def bind_trace_id(trace_id: str | None = None) -> Iterator[str]:
    bound = (trace_id or "").strip() or create_trace_id()
    token = _trace_id.set(bound)
    try:
        yield bound
    finally:
        _trace_id.reset(token)


def redact_text(value: str) -> str:
    text = _EMAIL.sub(REDACTED_EMAIL, str(value or ""))
    text = _KEY_VALUE_SECRET.sub(lambda m: f"{m.group(1)}={REDACTED}", text)
    return _BEARER.sub(f"Bearer {REDACTED}", text)


def redact_value(value: Any) -> Any:
    """JSON-safe copy of ``value`` with secrets and email addresses masked."""
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {
            str(k): REDACTED if _SENSITIVE_KEYS.search(str(k).lower().replace("-", "_")) else redact_value(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set)):
        items = sorted(value, key=str) if isinstance(value, set) else value
        return [redact_value(item) for item in items]
    return redact_text(str(value))


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


class OperationalSupport:
    """Append-only JSONL log of support events (command runs, crashes)."""

    def __init__(self, events_path: str | Path | None = None) -> None:
        self.events_path = Path(events_path or user_data_dir() / "logs" / "support-events.jsonl")
        self.events_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()

    def emit_event(
        self,
        *,
        event_type: str,
        message: str,
        level: str = "INFO",
        trace_id: str | None = None,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        trace = (trace_id or current_trace_id() or create_trace_id()).strip()
        payload: dict[str, Any] = {
            "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            "event_type": (event_type or "").strip() or "support.event",
            "level": (level or "INFO").strip().upper(),
            "trace_id": trace,
            "message": redact_text(message),
            "app_version": get_app_version(),
            "pid": os.getpid(),
        }
        if data:
            payload["data"] = redact_value(data)

        with self._lock, self.events_path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(payload, ensure_ascii=True, sort_keys=True) + "\n")
        return trace

    def capture_exception(
        self,
        *,
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: Any,
        context: str,
        trace_id: str | None = None,
    ) -> str:
        """Record an unexpected failure with its stack trace as an ``app.crash`` event."""
        return self.emit_event(
            event_type="app.crash",
            level="ERROR",
            trace_id=trace_id,
            message=f"Unhandled exception in {context}: {exc_value}",
            data={
                "context": context,
                "exception_type": exc_type.__name__,
                "error_code": getattr(exc_value, "code", None),
                "stacktrace": "".join(traceback.format_exception(exc_type, exc_value, exc_traceback)),
            },
        )

    @contextmanager
    def traced_command(self, name: str, **params: Any) -> Iterator[str]:
        """Bind a trace id around one command and record its start and outcome."""
        with bind_trace_id() as trace_id:
            self.emit_event(
                event_type="cli.command.started",
                message=f"Command {name} started",
                data={"command": name, "params": params},
            )
            try:
                yield trace_id
            except BaseException as exc:
                self.emit_event(
                    event_type="cli.command.failed",
                    level="ERROR",
                    message=f"Command {name} failed: {exc}",
                    data={
                        "command": name,
                        "exception_type": type(exc).__name__,
                        "error_code": getattr(exc, "code", None),
                    },
                )
                raise
            self.emit_event(
                event_type="cli.command.finished",
                message=f"Command {name} finished",
                data={"command": name},
            )

    def read_events(self, *, trace_id: str | None = None) -> list[dict[str, Any]]:
        if not self.events_path.exists():
            return []
        events: list[dict[str, Any]] = []
        for line in self.events_path.read_text(encoding="utf-8", errors="ignore").splitlines():
            try:
                payload = json.loads(line)
            except json.JSONDecodeError:
                if line.strip():
                    logger.warning("Skipping malformed support event line in %s", self.events_path)
                continue
            if not isinstance(payload, dict):
                continue
            if trace_id and payload.get("trace_id") != trace_id:
                continue
            events.append(payload)
        return events


_GLOBAL_SUPPORT: OperationalSupport | None = None


def get_operational_support() -> OperationalSupport:
    global _GLOBAL_SUPPORT
    if _GLOBAL_SUPPORT is None:
        _GLOBAL_SUPPORT = OperationalSupport()
    return _GLOBAL_SUPPORT


__all__ = [
    "OperationalSupport",
    "REDACTED",
    "REDACTED_EMAIL",
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
    "get_operational_support",
    "redact_text",
    "redact_value",
]
