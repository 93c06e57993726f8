"""Per-model counters snapshot dataclass."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .latency_stats_snapshot import LatencyStatsSnapshot


@dataclass(frozen=True)
class ModelCountersSnapshot:
    """Point-in-time copy of one model's completion counters."""

    model: str
    total: int
    success: int
    failure: int
    streamed: int
    latency: LatencyStatsSnapshot

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["ModelCountersSnapshot"]
