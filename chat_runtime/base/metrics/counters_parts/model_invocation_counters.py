"""Thread-safe in-memory completion counters for one public model name."""

from __future__ import annotations

from threading import RLock
from typing import Optional

from .latency_stats_snapshot import LatencyStatsSnapshot
from .model_counters_snapshot import ModelCountersSnapshot


class ModelInvocationCounters:
    """Aggregate success/failure counts and latency for one model."""

    __slots__ = (
        "_model",
        "_lock",
        "_success",
        "_failure",
        "_streamed",
        "_latency_count",
        "_latency_total",
        "_latency_min",
        "_latency_max",
    )

    def __init__(self, model: str):
        self._model = model
        self._lock = RLock()
        self._success = 0
        self._failure = 0
        self._streamed = 0
        self._latency_count = 0
        self._latency_total = 0.0
        self._latency_min: Optional[float] = None
        self._latency_max: Optional[float] = None

    def record(self, duration_ms: float, *, error: bool, stream: bool = False) -> None:
        """Record one completion outcome."""
        with self._lock:
            if error:
                self._failure += 1
            else:
                self._success += 1
            if stream:
                self._streamed += 1
            self._update_latency(duration_ms)

    def _update_latency(self, duration_ms: float) -> None:
        if duration_ms < 0:
            return
        if self._latency_min is None or duration_ms < self._latency_min:
            self._latency_min = duration_ms
        if self._latency_max is None or duration_ms > self._latency_max:
            self._latency_max = duration_ms
        self._latency_count += 1
        self._latency_total += duration_ms

    def snapshot(self, reset: bool = False) -> ModelCountersSnapshot:
        """Return an immutable snapshot, optionally zeroing the counters."""
        with self._lock:
            avg_ms = self._latency_total / self._latency_count if self._latency_count else None
            snapshot = ModelCountersSnapshot(
                model=self._model,
                total=self._success + self._failure,
                success=self._success,
                failure=self._failure,
                streamed=self._streamed,
                latency=LatencyStatsSnapshot(
                    count=self._latency_count,
                    total_ms=self._latency_total,
                    min_ms=self._latency_min,
                    max_ms=self._latency_max,
                    avg_ms=avg_ms,
                ),
            )
            if reset:
                self._success = 0
                self._failure = 0
                self._streamed = 0
                self._latency_count = 0
                self._latency_total = 0.0
                self._latency_min = None
                self._latency_max = None
            return snapshot


__all__ = ["ModelInvocationCounters"]
