"""
Scalar statistics over canonical request records.
"""

from dataclasses import dataclass
from typing import Any

from konnect_mcp.analytics.records import CanonicalRecord, to_frame
from konnect_mcp.utils import percentage, round_half_up

PERCENTILES = (50, 90, 99)


@dataclass(frozen=True)
class ScalarStatistics:
    average_latency_ms: float = 0.0
    success_rate_percent: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "averageLatencyMs": self.average_latency_ms,
            "successRate": self.success_rate_percent,
        }


def compute(records: list[CanonicalRecord]) -> ScalarStatistics:
    """Average latency and success rate.

    Records without a latency contribute 0 to the sum but still count in the
    denominator. Success means a 2xx status code.
    """
    total = len(records)
    if total == 0:
        return ScalarStatistics()

    frame = to_frame(records)
    latency_sum = frame["latency_total_ms"].astype("float64").fillna(0.0).sum()
    success_count = sum(1 for r in records if r.is_success)

    return ScalarStatistics(
        average_latency_ms=round_half_up(float(latency_sum) / total),
        success_rate_percent=percentage(success_count, total),
    )


def latency_percentiles(records: list[CanonicalRecord]) -> dict[str, float]:
    """Nearest-rank p50, p90, p99 of total latency, ignoring missing values.

    The p-th percentile is the smallest value with at least p% of the values
    at or below it: sorted[ceil(p * n / 100) - 1].
    """
    latencies = sorted(r.latency_total_ms for r in records if r.latency_total_ms is not None)
    if not latencies:
        return {f"p{p}": 0.0 for p in PERCENTILES}
    n = len(latencies)
    # integer ceil division keeps the rank exact
    return {f"p{p}": round_half_up(latencies[max(-(-p * n // 100) - 1, 0)]) for p in PERCENTILES}
