"""In-process exporter keeping per-model completion counters.

Useful for embedding applications that want a quick health view without an
external metrics backend, and for asserting metric emission in tests.
"""
from __future__ import annotations

from threading import RLock
from typing import Dict, List

from .counters_parts import ModelCountersSnapshot, ModelInvocationCounters
from .exporter import CompletionMetricsPayload, MetricsExporter


class CountingMetricsExporter(MetricsExporter):
    """Record every payload and aggregate it per model."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._counters: Dict[str, ModelInvocationCounters] = {}
        self.payloads: List[CompletionMetricsPayload] = []

    def emit_completion_metrics(self, payload: CompletionMetricsPayload) -> None:
        with self._lock:
            counters = self._counters.get(payload.model)
            if counters is None:
                counters = ModelInvocationCounters(payload.model)
                self._counters[payload.model] = counters
            self.payloads.append(payload)
        counters.record(
            payload.duration_ms,
            error=payload.error,
            stream=bool(payload.labels.get("stream", False)),
        )

    def snapshot(self, model: str) -> ModelCountersSnapshot:
        with self._lock:
            counters = self._counters.get(model) or ModelInvocationCounters(model)
        return counters.snapshot()

    def models(self) -> List[str]:
        with self._lock:
            return sorted(self._counters)


__all__ = ["CountingMetricsExporter"]
