"""Statistics over raw metric samples.

Produces exactly the statistic names k6 itself reports for each metric
kind, so event-log input renders the same way as a handleSummary export.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from functools import cmp_to_key

from k6r.domain.models import MetricKind

TREND_PERCENTILES: tuple[tuple[str, float], ...] = (
    ("med", 50.0),
    ("p(90)", 90.0),
    ("p(95)", 95.0),
    ("p(99)", 99.0),
)


def _compare(a: float, b: float) -> int:
    # NaN compares equal to everything.
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def sort_samples(samples: Sequence[float]) -> list[float]:
    """Return the samples in ascending order without failing on NaN."""
    return sorted(samples, key=cmp_to_key(_compare))


def percentile(sorted_samples: Sequence[float], p: float) -> float:
    """Linearly interpolated percentile of an ascending sequence.

    Returns 0.0 for an empty sequence and the single value for a
    one-element sequence, whatever ``p`` is.
    """
    n = len(sorted_samples)
    if n == 0:
        return 0.0
    if n == 1:
        return sorted_samples[0]

    index = (p / 100.0) * (n - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    fraction = index - lower

    if upper >= n:
        return sorted_samples[n - 1]
    return sorted_samples[lower] + fraction * (sorted_samples[upper] - sorted_samples[lower])


def compute_stats(samples: Sequence[float], kind: MetricKind) -> dict[str, float]:
    """Aggregate raw samples into the statistics reported for ``kind``."""
    if not samples:
        return {}

    ordered = sort_samples(samples)
    total = sum(samples)
    count = float(len(samples))

    if kind is MetricKind.COUNTER:
        # Rough estimate: samples are per-occurrence values, not timestamps.
        return {
            "count": count,
            "rate": count / max(total / 1000.0, 1.0),
        }

    if kind is MetricKind.RATE:
        passes = float(sum(1 for v in samples if v > 0))
        return {
            "rate": passes / count,
            "passes": passes,
            "fails": count - passes,
        }

    if kind is MetricKind.GAUGE:
        return {
            "value": ordered[-1],
            "min": ordered[0],
            "max": ordered[-1],
        }

    stats = {
        "avg": total / count,
        "min": ordered[0],
        "max": ordered[-1],
    }
    for name, p in TREND_PERCENTILES:
        stats[name] = percentile(ordered, p)
    return stats
