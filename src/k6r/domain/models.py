"""Core data models for k6r.

All types are frozen dataclasses built once by a parser and only read
afterwards by the renderer.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class MetricKind(Enum):
    """Kind of a k6 metric."""

    COUNTER = "counter"
    RATE = "rate"
    GAUGE = "gauge"
    TREND = "trend"

    @classmethod
    def parse(cls, text: str | None) -> MetricKind:
        """Map a declared kind string to a member, defaulting to TREND."""
        try:
            return cls(text)
        except ValueError:
            return cls.TREND


class InputFormat(Enum):
    """Shape of the raw k6 output handed to the pipeline."""

    STRUCTURED_SUMMARY = "summary"
    EVENT_LOG = "jsonl"

    @property
    def label(self) -> str:
        """Human-readable name reported on stderr."""
        if self is InputFormat.STRUCTURED_SUMMARY:
            return "handleSummary JSON"
        return "JSONL (--out json)"


@dataclass(frozen=True)
class ThresholdResult:
    """Outcome of a single threshold expression."""

    ok: bool


@dataclass(frozen=True)
class Check:
    """A named check with cumulative pass/fail counts."""

    name: str
    passes: int
    fails: int

    @property
    def success_rate(self) -> float:
        """Percentage of passing executions; 100 when the check never ran."""
        total = self.passes + self.fails
        if total == 0:
            return 100.0
        return self.passes / total * 100.0


@dataclass(frozen=True)
class Group:
    """A node of the group tree. Parents own their children."""

    name: str
    groups: tuple[Group, ...] = ()
    checks: tuple[Check, ...] = ()

    def iter_checks(self) -> Iterator[Check]:
        """Yield this group's checks, then each subgroup's, depth first."""
        yield from self.checks
        for sub in self.groups:
            yield from sub.iter_checks()


@dataclass(frozen=True)
class State:
    """Run-level information about the test."""

    test_run_duration_ms: float


@dataclass(frozen=True)
class Metric:
    """One named measurement stream with its statistics and thresholds."""

    kind: MetricKind = MetricKind.TREND
    contains: str = ""
    values: dict[str, float] = field(default_factory=lambda: dict[str, float]())
    thresholds: dict[str, ThresholdResult] = field(
        default_factory=lambda: dict[str, ThresholdResult]()
    )

    @property
    def is_time(self) -> bool:
        """True when the values are durations in milliseconds."""
        return self.contains == "time"


@dataclass(frozen=True)
class Summary:
    """Root aggregate consumed by the renderer."""

    metrics: dict[str, Metric] = field(default_factory=lambda: dict[str, Metric]())
    root_group: Group | None = None
    state: State | None = None
