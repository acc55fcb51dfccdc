"""Parser for the handleSummary JSON document.

Values are taken verbatim from the document; nothing is recomputed.
Fields k6 emits that the report does not use are ignored.
"""

from __future__ import annotations

from typing import Any

from k6r.domain.errors import ParseError
from k6r.domain.models import Check, Group, Metric, MetricKind, State, Summary, ThresholdResult
from k6r.parsing import _json


class _ShapeError(Exception):
    """Internal: a field does not have the type the model needs."""


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_object(value: object, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _ShapeError(f"{where}: expected an object")
    return value


def _require_str(value: object, where: str) -> str:
    if not isinstance(value, str):
        raise _ShapeError(f"{where}: expected a string")
    return value


def _require_uint(value: object, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise _ShapeError(f"{where}: expected a non-negative integer")
    return value


def _kind_from_str(value: object, where: str) -> MetricKind:
    text = _require_str(value, where)
    try:
        return MetricKind(text)
    except ValueError:
        raise _ShapeError(
            f"{where}: unknown metric type {text!r}, expected one of "
            + ", ".join(k.value for k in MetricKind)
        ) from None


def _values_from_dict(raw: object, where: str) -> dict[str, float]:
    values: dict[str, float] = {}
    for key, value in _require_object(raw, where).items():
        if not _is_number(value):
            raise _ShapeError(f"{where}.{key}: expected a number")
        values[key] = float(value)
    return values


def _thresholds_from_dict(raw: object, where: str) -> dict[str, ThresholdResult]:
    thresholds: dict[str, ThresholdResult] = {}
    for expr, result in _require_object(raw, where).items():
        ok = _require_object(result, f"{where}.{expr}").get("ok")
        if not isinstance(ok, bool):
            raise _ShapeError(f"{where}.{expr}.ok: expected a boolean")
        thresholds[expr] = ThresholdResult(ok=ok)
    return thresholds


def _metric_from_dict(raw: object, where: str) -> Metric:
    d = _require_object(raw, where)
    if "type" not in d:
        raise _ShapeError(f"{where}: missing field 'type'")
    return Metric(
        kind=_kind_from_str(d["type"], f"{where}.type"),
        contains=_require_str(d.get("contains", ""), f"{where}.contains"),
        values=_values_from_dict(d.get("values", {}), f"{where}.values"),
        thresholds=_thresholds_from_dict(d.get("thresholds", {}), f"{where}.thresholds"),
    )


def _check_from_dict(raw: object, where: str) -> Check:
    d = _require_object(raw, where)
    for name in ("name", "passes", "fails"):
        if name not in d:
            raise _ShapeError(f"{where}: missing field {name!r}")
    return Check(
        name=_require_str(d["name"], f"{where}.name"),
        passes=_require_uint(d["passes"], f"{where}.passes"),
        fails=_require_uint(d["fails"], f"{where}.fails"),
    )


def _group_from_dict(raw: object, where: str) -> Group:
    d = _require_object(raw, where)
    if "name" not in d:
        raise _ShapeError(f"{where}: missing field 'name'")
    groups_raw = d.get("groups", [])
    checks_raw = d.get("checks", [])
    if not isinstance(groups_raw, list):
        raise _ShapeError(f"{where}.groups: expected an array")
    if not isinstance(checks_raw, list):
        raise _ShapeError(f"{where}.checks: expected an array")
    return Group(
        name=_require_str(d["name"], f"{where}.name"),
        groups=tuple(
            _group_from_dict(g, f"{where}.groups[{i}]") for i, g in enumerate(groups_raw)
        ),
        checks=tuple(
            _check_from_dict(c, f"{where}.checks[{i}]") for i, c in enumerate(checks_raw)
        ),
    )


def _state_from_dict(raw: object) -> State:
    d = _require_object(raw, "state")
    if "testRunDurationMs" not in d:
        raise _ShapeError("state: missing field 'testRunDurationMs'")
    duration = d["testRunDurationMs"]
    if not _is_number(duration):
        raise _ShapeError("state.testRunDurationMs: expected a number")
    return State(test_run_duration_ms=float(duration))


def _summary_from_dict(data: object) -> Summary:
    d = _require_object(data, "document")
    metrics_raw = _require_object(d.get("metrics", {}), "metrics")
    metrics = {
        name: _metric_from_dict(raw, f"metrics.{name}") for name, raw in metrics_raw.items()
    }
    root_raw = d.get("root_group")
    state_raw = d.get("state")
    return Summary(
        metrics=metrics,
        root_group=None if root_raw is None else _group_from_dict(root_raw, "root_group"),
        state=None if state_raw is None else _state_from_dict(state_raw),
    )


def parse_summary(text: str) -> Summary:
    """Deserialize a handleSummary document into a Summary.

    Raises ParseError when the text is not JSON or its shape does not fit
    the model.
    """
    try:
        data = _json.loads(text)
        return _summary_from_dict(data)
    except (ValueError, OverflowError, RecursionError, _ShapeError) as exc:
        raise ParseError(f"Failed to parse JSON: {exc}") from exc
