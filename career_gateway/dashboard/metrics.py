"""
Request metrics.

Tracks one record per suggestion request and summarizes which models
actually served traffic, how many upstream calls it took, and latency.
Only the most recent records are kept, so the summary covers a sliding window.
"""

import statistics
from collections import Counter, deque
from dataclasses import dataclass

MAX_RECORDS = 10_000


@dataclass
class RequestMetric:
    timestamp: float
    model_used: str | None   # None when every candidate failed
    attempts: int            # upstream calls made for this request
    total_time_ms: float
    ok: bool


class MetricsCollector:
    """In-memory metrics store. Replace with Prometheus/InfluxDB for production."""

    def __init__(self, max_records: int = MAX_RECORDS):
        self._metrics: deque[RequestMetric] = deque(maxlen=max_records)

    def record(self, metric: RequestMetric):
        self._metrics.append(metric)

    def summary(self) -> dict:
        if not self._metrics:
            return {"total_requests": 0}

        total = len(self._metrics)
        successes = [m for m in self._metrics if m.ok]
        by_model = Counter(m.model_used for m in successes)
        latencies = [m.total_time_ms for m in self._metrics]

        return {
            "total_requests": total,
            "succeeded": len(successes),
            "failed": total - len(successes),
            "success_pct": round(len(successes) / total * 100, 1),
            "models_used": dict(by_model),
            "latency_ms": {
                "p50": self._percentile(latencies, 50),
                "p95": self._percentile(latencies, 95),
                "p99": self._percentile(latencies, 99),
                "avg": round(statistics.mean(latencies), 2),
            },
            "attempts": {
                "total": sum(m.attempts for m in self._metrics),
                "avg": round(statistics.mean(m.attempts for m in self._metrics), 2),
                "max": max(m.attempts for m in self._metrics),
            },
        }

    def _percentile(self, data: list[float], pct: int) -> float:
        if not data:
            return 0.0
        sorted_data = sorted(data)
        idx = int(len(sorted_data) * pct / 100)
        idx = min(idx, len(sorted_data) - 1)
        return round(sorted_data[idx], 2)
