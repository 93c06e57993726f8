"""One-class-per-file parts of the completion counters."""

from .latency_stats_snapshot import LatencyStatsSnapshot
from .model_counters_snapshot import ModelCountersSnapshot
from .model_invocation_counters import ModelInvocationCounters

__all__ = ["LatencyStatsSnapshot", "ModelCountersSnapshot", "ModelInvocationCounters"]
