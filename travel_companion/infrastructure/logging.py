"""Structured logging: JSON lines with personal data redacted."""

from __future__ import annotations

import json
import sys
import time
import uuid
from typing import Any, Optional

from travel_companion.infrastructure.redact import redact_sensitive


class StructuredLogger:
    """Writes one JSON object per line and scrubs emails and credentials."""

    def __init__(self, trace_id: Optional[str] = None, output=None, prefix: str = ""):
        self.trace_id = trace_id or f"{prefix}{str(uuid.uuid4())[:8]}"
        self.prefix = prefix
        self._output = output or sys.stderr

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        try:
            line = json.dumps(data, ensure_ascii=False, default=str)
            self._output.write(redact_sensitive(line) + "\n")
            self._output.flush()
        except Exception as exc:
            # Last-resort fallback to avoid silent logger failures.
            try:
                fallback = {
                    "event": "logger_internal_error",
                    "trace_id": self.trace_id,
                    "timestamp": time.time(),
                    "error": str(exc),
                }
                sys.stderr.write(json.dumps(fallback, ensure_ascii=False, default=str) + "\n")
                sys.stderr.flush()
            except Exception:
                return

    def transition(self, operation: str, *, trip_id: str, actor_id: Optional[str] = None, **extra: Any) -> None:
        self._emit({
            "event": "trip_transition",
            "operation": operation,
            "trip_id": trip_id,
            "actor_id": actor_id,
            **extra,
        })

    def rejected(self, operation: str, *, kind: str, reason: str, **extra: Any) -> None:
        self._emit({
            "event": "trip_rejected",
            "operation": operation,
            "kind": kind,
            "reason": redact_sensitive(reason),
            **extra,
        })

    def error(self, operation: str, error: str, **extra: Any) -> None:
        self._emit({"event": "error", "operation": operation, "error": redact_sensitive(error), **extra})

    def summary(self, **extra: Any) -> None:
        self._emit({"event": "summary", **extra})


# global logger
_logger: Optional[StructuredLogger] = None


def get_logger(trace_id: Optional[str] = None, prefix: str = "") -> StructuredLogger:
    global _logger
    if _logger is None or _logger.prefix != prefix or (trace_id and _logger.trace_id != trace_id):
        _logger = StructuredLogger(trace_id=trace_id, prefix=prefix)
    return _logger


__all__ = ["StructuredLogger", "get_logger"]
