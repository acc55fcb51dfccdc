"""Render a Summary as a Markdown report.

Sections appear in a fixed order and every table is sorted, so the same
Summary always renders to the same text.
"""

from __future__ import annotations

from k6r.config import REPORT_TITLE
from k6r.domain.models import Check, Metric, MetricKind, Summary
from k6r.formatting import (
    format_count,
    format_duration,
    format_number,
    format_percent,
    format_rate,
    format_value,
    to_uint,
)

STAT_PRIORITY: tuple[str, ...] = ("avg", "min", "med", "max", "p(90)", "p(95)", "p(99)")

_HTTP_PREFIX = "http_"
_SUBMETRIC_MARK = "{"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _is_submetric(name: str) -> bool:
    return _SUBMETRIC_MARK in name


def _is_http(name: str) -> bool:
    return name.startswith(_HTTP_PREFIX) and not _is_submetric(name)


def _stat_sort_key(key: str) -> tuple[int, str]:
    """Priority stats first in their fixed order, then the rest by name."""
    try:
        return (STAT_PRIORITY.index(key), "")
    except ValueError:
        return (len(STAT_PRIORITY), key)


def _stat_rows(metric: Metric) -> list[str]:
    lines = ["| Stat | Value |", "|------|-------|"]
    for key in sorted(metric.values, key=_stat_sort_key):
        value = format_value(metric.values[key], key, metric.contains, metric.kind)
        lines.append(f"| {key} | {value} |")
    return lines


def _sorted_metrics(metrics: dict[str, Metric], names: list[str]) -> list[tuple[str, Metric]]:
    return [(name, metrics[name]) for name in sorted(names)]


def collect_checks(summary: Summary) -> list[Check]:
    """All checks of the group tree in pre-order, or [] without a tree."""
    if summary.root_group is None:
        return []
    return list(summary.root_group.iter_checks())


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _header_section(summary: Summary) -> list[str]:
    lines = [f"# {REPORT_TITLE}", ""]
    if summary.state is not None:
        lines.extend(
            [f"**Test Duration:** {format_duration(summary.state.test_run_duration_ms)}", ""]
        )
    lines.extend(["---", ""])
    return lines


def _summary_section(summary: Summary) -> list[str]:
    lines = ["## Summary", "", "| Metric | Value |", "|--------|-------|"]
    metrics = summary.metrics

    reqs = metrics.get("http_reqs")
    if reqs is not None:
        if "count" in reqs.values:
            lines.append(f"| Total Requests | {format_count(reqs.values['count'])} |")
        if "rate" in reqs.values:
            lines.append(f"| Request Rate | {format_rate(reqs.values['rate'])} |")

    failed = metrics.get("http_req_failed")
    if failed is not None and "fails" in failed.values:
        fails = format_count(failed.values["fails"])
        rate = format_percent(failed.values.get("rate", 0.0))
        lines.append(f"| Failed Requests | {fails} ({rate}) |")

    duration = metrics.get("http_req_duration")
    if duration is not None:
        if "avg" in duration.values:
            lines.append(f"| Avg Response Time | {format_duration(duration.values['avg'])} |")
        if "p(95)" in duration.values:
            lines.append(f"| P95 Response Time | {format_duration(duration.values['p(95)'])} |")

    iterations = metrics.get("iterations")
    if iterations is not None and "count" in iterations.values:
        lines.append(f"| Iterations | {format_count(iterations.values['count'])} |")

    vus = metrics.get("vus")
    if vus is not None and "value" in vus.values:
        lines.append(f"| Virtual Users | {to_uint(vus.values['value'])} |")

    lines.extend(["", "---", ""])
    return lines


def _thresholds_section(summary: Summary) -> list[str]:
    entries = [
        (name, expr, result.ok)
        for name, metric in summary.metrics.items()
        for expr, result in metric.thresholds.items()
    ]
    if not entries:
        return []

    # Failing first, then by metric name; the expression keeps ties stable.
    entries.sort(key=lambda e: (e[2], e[0], e[1]))

    lines = [
        "## Thresholds",
        "",
        "| Metric | Threshold | Status |",
        "|--------|-----------|--------|",
    ]
    for name, expr, ok in entries:
        status = "✓ PASS" if ok else "✗ **FAIL**"
        lines.append(f"| {name} | `{expr}` | {status} |")
    lines.extend(["", "---", ""])
    return lines


def _http_metrics_section(summary: Summary) -> list[str]:
    names = [name for name in summary.metrics if _is_http(name)]
    if not names:
        return []

    lines = ["## HTTP Metrics", ""]
    for name, metric in _sorted_metrics(summary.metrics, names):
        lines.extend([f"### {name} ({metric.kind.value})", ""])
        lines.extend(_stat_rows(metric))
        lines.append("")
    lines.extend(["---", ""])
    return lines


def _checks_section(summary: Summary) -> list[str]:
    checks = collect_checks(summary)
    if not checks:
        return []

    lines = [
        "## Checks",
        "",
        "| Check | Passes | Fails | Success Rate |",
        "|-------|--------|-------|-------------|",
    ]
    for check in checks:
        icon = "✓" if check.fails == 0 else "✗"
        lines.append(
            f"| {icon} {check.name} | {check.passes} | {check.fails} "
            f"| {check.success_rate:.2f}% |"
        )
    lines.extend(["", "---", ""])
    return lines


def _counters_table(rows: list[tuple[str, Metric]]) -> list[str]:
    lines = ["### Counters", "", "| Metric | Count | Rate |", "|--------|-------|------|"]
    for name, metric in rows:
        count = format_count(metric.values.get("count", 0.0))
        rate = format_rate(metric.values.get("rate", 0.0))
        lines.append(f"| {name} | {count} | {rate} |")
    lines.append("")
    return lines


def _rates_table(rows: list[tuple[str, Metric]]) -> list[str]:
    lines = [
        "### Rates",
        "",
        "| Metric | Rate | Passes | Fails |",
        "|--------|------|--------|-------|",
    ]
    for name, metric in rows:
        rate = format_percent(metric.values.get("rate", 0.0))
        passes = format_count(metric.values.get("passes", 0.0))
        fails = format_count(metric.values.get("fails", 0.0))
        lines.append(f"| {name} | {rate} | {passes} | {fails} |")
    lines.append("")
    return lines


def _gauges_table(rows: list[tuple[str, Metric]]) -> list[str]:
    lines = [
        "### Gauges",
        "",
        "| Metric | Value | Min | Max |",
        "|--------|-------|-----|-----|",
    ]
    for name, metric in rows:
        value, low, high = (
            format_number(metric.values.get(key, 0.0)) for key in ("value", "min", "max")
        )
        lines.append(f"| {name} | {value} | {low} | {high} |")
    lines.append("")
    return lines


def _trends_table(rows: list[tuple[str, Metric]]) -> list[str]:
    lines = ["### Trends", ""]
    for name, metric in rows:
        lines.extend([f"**{name}**", ""])
        lines.extend(_stat_rows(metric))
        lines.append("")
    return lines


_KIND_TABLES = (
    (MetricKind.COUNTER, _counters_table),
    (MetricKind.RATE, _rates_table),
    (MetricKind.GAUGE, _gauges_table),
    (MetricKind.TREND, _trends_table),
)


def _all_metrics_section(summary: Summary) -> list[str]:
    by_kind: dict[MetricKind, list[str]] = {kind: [] for kind in MetricKind}
    for name, metric in summary.metrics.items():
        if _is_submetric(name) or name.startswith(_HTTP_PREFIX):
            continue
        by_kind[metric.kind].append(name)

    lines = ["## All Metrics", ""]
    for kind, table in _KIND_TABLES:
        if by_kind[kind]:
            lines.extend(table(_sorted_metrics(summary.metrics, by_kind[kind])))
    return lines


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def render_report(summary: Summary) -> str:
    """Render the full Markdown report for a Summary."""
    lines: list[str] = []
    lines.extend(_header_section(summary))
    lines.extend(_summary_section(summary))
    lines.extend(_thresholds_section(summary))
    lines.extend(_http_metrics_section(summary))
    lines.extend(_checks_section(summary))
    lines.extend(_all_metrics_section(summary))
    return "\n".join(lines) + "\n"
