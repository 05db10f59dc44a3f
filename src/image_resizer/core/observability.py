"""Per-job timing collected for the end-of-run summary."""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class PerformanceMetrics:
    """Wall-clock span of one job."""

    start_time: float
    end_time: float
    success: bool

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


class MetricsCollector:
    """Accumulates job timings and reduces them to summary statistics."""

    def __init__(self):
        self._metrics: List[PerformanceMetrics] = []

    def record_metric(self, metric: PerformanceMetrics):
        self._metrics.append(metric)

    def get_summary(self) -> Dict[str, float]:
        """Return counts and min/avg/max durations; empty when nothing was recorded."""
        if not self._metrics:
            return {}

        durations = [m.duration for m in self._metrics]
        successful = sum(1 for m in self._metrics if m.success)

        return {
            "total_operations": len(self._metrics),
            "successful_operations": successful,
            "failed_operations": len(self._metrics) - successful,
            "min_duration": min(durations),
            "avg_duration": sum(durations) / len(durations),
            "max_duration": max(durations),
        }
