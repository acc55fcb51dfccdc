"""Shared pytest fixtures for k6r tests.

Provides sample inputs in both k6 output shapes and a factory for
metrics with sensible defaults.
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from k6r.domain.models import Metric, MetricKind, ThresholdResult

_MetricFactory = Any  # callable[..., Metric]


@pytest.fixture()
def make_metric() -> _MetricFactory:
    """Factory for Metric with sensible defaults."""

    def _factory(
        kind: MetricKind = MetricKind.TREND,
        *,
        contains: str = "default",
        values: dict[str, float] | None = None,
        thresholds: dict[str, bool] | None = None,
    ) -> Metric:
        return Metric(
            kind=kind,
            contains=contains,
            values=dict(values or {}),
            thresholds={k: ThresholdResult(ok=v) for k, v in (thresholds or {}).items()},
        )

    return _factory


@pytest.fixture()
def summary_document() -> dict[str, Any]:
    """A realistic handleSummary export."""
    return {
        "root_group": {
            "name": "",
            "path": "",
            "id": "d41d8cd98f00b204e9800998ecf8427e",
            "groups": [
                {
                    "name": "login",
                    "path": "::login",
                    "id": "b1b2",
                    "groups": [],
                    "checks": [
                        {"name": "logged in", "path": "::login::logged in", "id": "x",
                         "passes": 8, "fails": 2},
                    ],
                }
            ],
            "checks": [
                {"name": "status is 200", "path": "::status is 200", "id": "y",
                 "passes": 10, "fails": 0},
            ],
        },
        "options": {"summaryTrendStats": ["avg", "min", "med", "max", "p(90)", "p(95)"]},
        "state": {"isStdOutTTY": False, "isStdErrTTY": False, "testRunDurationMs": 30000.0},
        "metrics": {
            "http_reqs": {
                "type": "counter",
                "contains": "default",
                "values": {"count": 1500, "rate": 50.0},
            },
            "http_req_failed": {
                "type": "rate",
                "contains": "default",
                "values": {"rate": 0.02, "passes": 30, "fails": 1470},
                "thresholds": {"rate<0.01": {"ok": False}},
            },
            "http_req_duration": {
                "type": "trend",
                "contains": "time",
                "values": {"avg": 120.5, "min": 10.0, "med": 100.0, "max": 1500.0,
                           "p(90)": 200.0, "p(95)": 250.0},
                "thresholds": {"p(95)<500": {"ok": True}},
            },
            "http_req_duration{expected_response:true}": {
                "type": "trend",
                "contains": "time",
                "values": {"avg": 110.0},
            },
            "iterations": {
                "type": "counter",
                "contains": "default",
                "values": {"count": 300, "rate": 10.0},
            },
            "checks": {
                "type": "rate",
                "contains": "default",
                "values": {"rate": 0.9, "passes": 18, "fails": 2},
            },
            "vus": {
                "type": "gauge",
                "contains": "default",
                "values": {"value": 10, "min": 1, "max": 10},
            },
            "iteration_duration": {
                "type": "trend",
                "contains": "time",
                "values": {"avg": 1500.0, "min": 900.0, "max": 90000.0},
            },
        },
    }


@pytest.fixture()
def summary_text(summary_document: dict[str, Any]) -> str:
    return json.dumps(summary_document, indent=2)


def _line(record: dict[str, Any]) -> str:
    return json.dumps(record)


@pytest.fixture()
def event_log_text() -> str:
    """A small ``--out json`` event log."""
    records = [
        {"type": "Metric", "metric": "http_req_duration",
         "data": {"name": "http_req_duration", "type": "trend", "contains": "time",
                  "thresholds": ["p(95)<500"], "submetrics": None}},
        {"type": "Metric", "metric": "http_reqs",
         "data": {"name": "http_reqs", "type": "counter", "contains": "default",
                  "thresholds": []}},
        {"type": "Metric", "metric": "checks",
         "data": {"name": "checks", "type": "rate", "contains": "default", "thresholds": []}},
        {"type": "Point", "metric": "http_req_duration",
         "data": {"time": "2024-01-01T10:00:00.000+00:00", "value": 100.0, "tags": None}},
        {"type": "Point", "metric": "http_req_duration",
         "data": {"time": "2024-01-01T10:00:01.000+00:00", "value": 300.0,
                  "tags": {"group": ""}}},
        {"type": "Point", "metric": "http_req_duration",
         "data": {"time": "2024-01-01T10:00:02.000+00:00", "value": 5000.0,
                  "tags": {"expected_response": "true"}}},
        {"type": "Point", "metric": "http_reqs",
         "data": {"time": "2024-01-01T10:00:01.500+00:00", "value": 1, "tags": {}}},
        {"type": "Point", "metric": "http_reqs",
         "data": {"time": "2024-01-01T10:00:01.600+00:00", "value": 1, "tags": {}}},
        {"type": "Point", "metric": "checks",
         "data": {"time": "2024-01-01T10:00:01.700+00:00", "value": 1}},
        {"type": "Point", "metric": "checks",
         "data": {"time": "2024-01-01T10:00:01.800+00:00", "value": 0}},
    ]
    lines = [_line(r) for r in records]
    lines.insert(3, "{not json")
    lines.insert(5, "")
    return "\n".join(lines) + "\n"
