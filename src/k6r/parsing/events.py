"""Parser for k6 ``--out json`` event logs.

Each line is an independent JSON record. ``Metric`` records declare a
metric; ``Point`` records carry one sample. Samples are aggregated per
metric and turned into the same statistics a handleSummary export has.

Known limitations:
- threshold pass/fail is not present in the log, so every declared
  threshold is reported as passing;
- the run duration is computed from the time of day only, so runs that
  cross midnight are measured incorrectly;
- points tagged with anything besides ``group`` belong to sub-metrics and
  are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from k6r.domain.models import Metric, MetricKind, State, Summary, ThresholdResult
from k6r.parsing import _json
from k6r.stats.engine import compute_stats

logger = logging.getLogger(__name__)

_GROUP_TAG = "group"


@dataclass(frozen=True)
class _Record:
    """One well-formed line of the event log."""

    type: str
    metric: str
    data: dict[str, Any]


@dataclass
class _MetricCollector:
    """Accumulates the samples of one metric while the log is replayed."""

    kind: MetricKind = MetricKind.TREND
    contains: str = ""
    thresholds: list[str] = field(default_factory=lambda: list[str]())
    samples: list[float] = field(default_factory=lambda: list[float]())

    def to_metric(self) -> Metric:
        return Metric(
            kind=self.kind,
            contains=self.contains,
            values=compute_stats(self.samples, self.kind),
            thresholds={expr: ThresholdResult(ok=True) for expr in self.thresholds},
        )


def _optional(data: dict[str, Any], key: str, types: type | tuple[type, ...]) -> bool:
    value = data.get(key)
    return value is None or isinstance(value, types)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_line(line: str) -> _Record | None:
    """Decode one line, returning None if it is not a usable record."""
    try:
        raw = _json.loads(line)
    except (ValueError, RecursionError):
        return None
    if not isinstance(raw, dict):
        return None

    record_type = raw.get("type")
    metric = raw.get("metric")
    data = raw.get("data")
    if not isinstance(record_type, str) or not isinstance(metric, str):
        return None
    if not isinstance(data, dict):
        return None

    thresholds = data.get("thresholds", [])
    if not isinstance(thresholds, list) or not all(isinstance(t, str) for t in thresholds):
        return None
    if not (
        _optional(data, "type", str)
        and _optional(data, "contains", str)
        and _optional(data, "time", str)
        and _optional(data, "tags", dict)
    ):
        return None
    value = data.get("value")
    if value is not None:
        if not _is_number(value):
            return None
        try:
            float(value)
        except OverflowError:
            return None

    return _Record(type=record_type, metric=metric, data=data)


def _is_submetric_point(tags: dict[str, Any] | None) -> bool:
    if not tags:
        return False
    return any(key != _GROUP_TAG for key in tags)


def _time_of_day_ms(timestamp: str) -> float | None:
    """Milliseconds since midnight of an ISO-8601 timestamp, or None."""
    parts = timestamp.split("T")
    if len(parts) != 2:
        return None
    time_part = parts[1].split("+")[0].split("-")[0]
    components = time_part.split(":")
    if len(components) != 3:
        return None
    try:
        hours, minutes, seconds = (float(c) for c in components)
    except ValueError:
        return None
    return (hours * 3600 + minutes * 60 + seconds) * 1000


def event_log_duration(first: str | None, last: str | None) -> float | None:
    """Span between two timestamps in milliseconds.

    Only the time of day is compared. Returns None when either timestamp is
    missing or cannot be read.
    """
    if first is None or last is None:
        return None
    first_ms = _time_of_day_ms(first)
    last_ms = _time_of_day_ms(last)
    if first_ms is None or last_ms is None:
        return None
    return abs(last_ms - first_ms)


def parse_event_log(text: str) -> Summary:
    """Replay an NDJSON event log into a Summary.

    Never fails: unreadable lines are skipped and an unreadable time range
    just leaves the run duration out.
    """
    collectors: dict[str, _MetricCollector] = {}
    first_time: str | None = None
    last_time: str | None = None
    skipped = 0
    accepted = 0

    for lineno, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()
        if not line:
            continue

        record = _parse_line(line)
        if record is None:
            logger.debug("Skipping malformed line %d: %.120s", lineno, line)
            skipped += 1
            continue

        data = record.data
        if record.type == "Metric":
            if record.metric not in collectors:
                collectors[record.metric] = _MetricCollector(
                    kind=MetricKind.parse(data.get("type")),
                    contains=data.get("contains") or "",
                    thresholds=list(data.get("thresholds", [])),
                )
        elif record.type == "Point":
            value = data.get("value")
            if value is None:
                continue

            time = data.get("time")
            if time is not None:
                if first_time is None:
                    first_time = time
                last_time = time

            if _is_submetric_point(data.get("tags")):
                continue

            collectors.setdefault(record.metric, _MetricCollector()).samples.append(
                float(value)
            )
            accepted += 1

    logger.info(
        "Event log: %d metrics, %d points aggregated, %d lines skipped",
        len(collectors),
        accepted,
        skipped,
    )

    duration_ms = event_log_duration(first_time, last_time)
    if duration_ms is None:
        logger.debug("Run duration unavailable (first=%r, last=%r)", first_time, last_time)

    return Summary(
        metrics={name: c.to_metric() for name, c in collectors.items()},
        root_group=None,
        state=None if duration_ms is None else State(test_run_duration_ms=duration_ms),
    )
