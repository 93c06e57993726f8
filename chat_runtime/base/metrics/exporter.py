"""Metrics exporter interface and process-wide default.

Purpose
-------
- Give the chat decorator a stable, tiny contract for recording one
  completion outcome (duration, error flag, request labels) without coupling
  it to a particular metrics backend.

Design
------
- Simple base class with a single ``emit_completion_metrics`` method.
- ``NoOpMetricsExporter`` is the default sink.
- ``set_default_exporter`` swaps the process-wide sink (tests, embedding
  applications); ``emit_completion_metrics`` is the call site helper.

Failure Modes
-------------
- Emission is best-effort. ``emit_completion_metrics`` logs exporter errors
  as ``metrics.export.error`` and never raises to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..logging import get_logger, log_event

_logger = get_logger("chat_runtime.metrics")


@dataclass(frozen=True)
class CompletionMetricsPayload:
    """One completion outcome.

    Attributes:
        model: Public (registered) model name.
        duration_ms: Wall-clock time from call start to outcome.
        error: ``True`` when the call failed.
        labels: Flat request labels (see ``TelemetryLabels.as_dict``).
    """

    model: str
    duration_ms: float
    error: bool
    labels: Dict[str, Any] = field(default_factory=dict)


class MetricsExporter:
    """Minimal metrics exporter contract."""

    def emit_completion_metrics(self, payload: CompletionMetricsPayload) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class NoOpMetricsExporter(MetricsExporter):
    """Default exporter that does nothing."""

    def emit_completion_metrics(self, payload: CompletionMetricsPayload) -> None:  # noqa: D401 - trivial
        return


_DEFAULT_EXPORTER: MetricsExporter | None = None


def get_default_exporter() -> MetricsExporter:
    """Return the process-wide exporter (no-op until one is set)."""
    global _DEFAULT_EXPORTER
    if _DEFAULT_EXPORTER is None:
        _DEFAULT_EXPORTER = NoOpMetricsExporter()
    return _DEFAULT_EXPORTER


def set_default_exporter(exporter: Optional[MetricsExporter]) -> None:
    """Install ``exporter`` process-wide; ``None`` restores the no-op sink."""
    global _DEFAULT_EXPORTER
    _DEFAULT_EXPORTER = exporter


def emit_completion_metrics(
    payload: CompletionMetricsPayload, exporter: Optional[MetricsExporter] = None
) -> None:
    """Forward ``payload`` to ``exporter`` (default sink when omitted)."""
    sink = exporter or get_default_exporter()
    try:
        sink.emit_completion_metrics(payload)
    except Exception as exc:  # noqa: BLE001 - emission never fails the call
        log_event(
            _logger,
            "metrics.export.error",
            level=logging.WARNING,
            model=payload.model,
            exporter=type(sink).__name__,
            error=str(exc),
        )


__all__ = [
    "CompletionMetricsPayload",
    "MetricsExporter",
    "NoOpMetricsExporter",
    "get_default_exporter",
    "set_default_exporter",
    "emit_completion_metrics",
]
