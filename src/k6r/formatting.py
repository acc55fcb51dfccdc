"""Human-readable formatting of metric values.

Durations are always expressed in milliseconds on input.
"""

from __future__ import annotations

import math

from k6r.domain.models import MetricKind

_COUNT_KEYS = frozenset({"count", "passes", "fails"})
_UINT_MAX = 2**64 - 1


def to_uint(value: float) -> int:
    """Truncate toward zero, clamping negatives and NaN to 0."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return _UINT_MAX
    return min(int(value), _UINT_MAX)


def format_duration(ms: float) -> str:
    """Format a duration in milliseconds with the largest fitting unit."""
    if ms >= 60_000:
        return f"{ms / 60_000:.2f}m"
    if ms >= 1_000:
        return f"{ms / 1_000:.2f}s"
    if ms >= 1:
        return f"{ms:.2f}ms"
    return f"{ms * 1_000:.2f}µs"


def format_count(count: float) -> str:
    """Format a count, abbreviating thousands and millions."""
    n = to_uint(count)
    if n >= 1_000_000:
        return f"{n / 1_000_000:.2f}M"
    if n >= 1_000:
        return f"{n / 1_000:.2f}K"
    return str(n)


def format_rate(rate: float) -> str:
    return f"{rate:.2f}/s"


def format_percent(rate: float) -> str:
    """Format a 0..1 ratio as a percentage."""
    return f"{rate * 100:.2f}%"


def format_number(value: float) -> str:
    return f"{value:.2f}"


def format_value(value: float, key: str, contains: str, kind: MetricKind) -> str:
    """Format a single statistic of a metric for a stat table row."""
    if contains == "time":
        return format_duration(value)
    if key == "rate":
        if kind is MetricKind.COUNTER:
            return format_rate(value)
        if kind is MetricKind.RATE:
            return format_percent(value)
        return format_number(value)
    if key in _COUNT_KEYS:
        return format_count(value)
    return format_number(value)
