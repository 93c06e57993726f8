"""Completion metrics: exporter contract, request labels and counters.

Concrete backends (Prometheus, OTEL metrics) can be plugged in by subclassing
``MetricsExporter`` and installing it with ``set_default_exporter``.
"""
from __future__ import annotations

from .counters_parts import LatencyStatsSnapshot, ModelCountersSnapshot, ModelInvocationCounters
from .counting_exporter import CountingMetricsExporter
from .exporter import (
    CompletionMetricsPayload,
    MetricsExporter,
    NoOpMetricsExporter,
    emit_completion_metrics,
    get_default_exporter,
    set_default_exporter,
)
from .labels import TelemetryLabels

__all__ = [
    "CompletionMetricsPayload",
    "CountingMetricsExporter",
    "LatencyStatsSnapshot",
    "MetricsExporter",
    "ModelCountersSnapshot",
    "ModelInvocationCounters",
    "NoOpMetricsExporter",
    "TelemetryLabels",
    "emit_completion_metrics",
    "get_default_exporter",
    "set_default_exporter",
]
