"""Task-history spans for completion calls.

Every completion handled by the runtime is recorded as an OpenTelemetry span
(``opentelemetry-api``; with no SDK configured the spans are non-recording and
cost nothing). Each attribute written to a span is mirrored as one JSON log
line on the ``chat_runtime.task_history`` logger, tagged with the span's trace
and span ids, so the history is visible even without an exporter.

Spans are not made current: a streamed completion outlives the call that
opened it, so the span handle travels with the stream and is ended
explicitly.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

from .errors import classify_exception
from .logging import LogContext, get_logger, log_event

TASK_HISTORY_LOGGER = "chat_runtime.task_history"

_logger = get_logger(TASK_HISTORY_LOGGER)


def get_tracer(service_name: str = TASK_HISTORY_LOGGER) -> trace.Tracer:
    """Return the OpenTelemetry tracer used for task history."""
    return trace.get_tracer(service_name)


def _attribute_value(value: Any) -> Any:
    if isinstance(value, (str, bool, int, float)):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


class TaskSpan:
    """Handle over one task-history span.

    Usable as a context manager (ended on exit) or ended explicitly with
    :meth:`end`. Ending twice is a no-op.
    """

    def __init__(self, name: str, span: trace.Span):
        self.name = name
        self._span = span
        self._ended = False
        ctx = span.get_span_context()
        self.context = LogContext(
            trace_id=format(ctx.trace_id, "032x"),
            span_id=format(ctx.span_id, "016x"),
            extra={"task": name},
        )

    def set_attribute(self, key: str, value: Any) -> None:
        value = _attribute_value(value)
        self._span.set_attribute(key, value)
        log_event(_logger, "task_history.attribute", self.context, key=key, value=value)

    def error(self, event: str, exc: BaseException, **fields: Any) -> None:
        """Log a failure against the span and mark it as errored."""
        self._span.record_exception(exc)
        self._span.set_status(Status(StatusCode.ERROR, str(exc)))
        self.log_error(event, exc, **fields)

    def log_error(self, event: str, exc: BaseException, **fields: Any) -> None:
        """Log a failure at ERROR without changing the span status."""
        log_event(
            _logger,
            f"task_history.{event}",
            self.context,
            level=logging.ERROR,
            error=str(exc),
            error_type=type(exc).__name__,
            code=classify_exception(exc).value,
            **fields,
        )

    def end(self) -> None:
        if self._ended:
            return
        self._ended = True
        self._span.end()

    def __enter__(self) -> "TaskSpan":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end()


def start_task_span(name: str, attributes: Optional[Dict[str, Any]] = None) -> TaskSpan:
    """Start a task-history span and record its initial ``attributes``."""
    task = TaskSpan(name, get_tracer().start_span(name))
    for key, value in (attributes or {}).items():
        task.set_attribute(key, value)
    return task


__all__ = ["TASK_HISTORY_LOGGER", "TaskSpan", "get_tracer", "start_task_span"]
