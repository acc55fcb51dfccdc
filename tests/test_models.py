"""Tests for domain models."""

import dataclasses

import pytest

from k6r.domain.models import Check, Group, Metric, MetricKind, Summary


class TestMetricKind:
    @pytest.mark.parametrize("kind", list(MetricKind))
    def test_parse_known(self, kind: MetricKind) -> None:
        assert MetricKind.parse(kind.value) is kind

    @pytest.mark.parametrize("text", [None, "", "TREND", "histogram"])
    def test_parse_unknown_is_trend(self, text: str | None) -> None:
        assert MetricKind.parse(text) is MetricKind.TREND


class TestMetric:
    def test_defaults(self) -> None:
        m = Metric()
        assert m.kind is MetricKind.TREND
        assert m.contains == ""
        assert m.values == {}
        assert not m.is_time

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Metric().contains = "time"  # type: ignore[misc]


class TestCheck:
    def test_success_rate(self) -> None:
        assert Check("c", 3, 1).success_rate == 75.0

    def test_success_rate_without_runs(self) -> None:
        assert Check("c", 0, 0).success_rate == 100.0


class TestGroup:
    def test_iter_checks_empty(self) -> None:
        assert list(Group(name="").iter_checks()) == []

    def test_summary_defaults(self) -> None:
        s = Summary()
        assert s.metrics == {}
        assert s.root_group is None
        assert s.state is None
