"""Latency statistics snapshot dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class LatencyStatsSnapshot:
    """Immutable snapshot of aggregated completion latency.

    Attributes:
        count: Number of recorded outcomes.
        total_ms: Sum of observed durations in milliseconds.
        min_ms: Fastest observed duration, ``None`` without samples.
        max_ms: Slowest observed duration, ``None`` without samples.
        avg_ms: Arithmetic mean, ``None`` without samples.
    """

    count: int
    total_ms: float
    min_ms: Optional[float]
    max_ms: Optional[float]
    avg_ms: Optional[float]


__all__ = ["LatencyStatsSnapshot"]
