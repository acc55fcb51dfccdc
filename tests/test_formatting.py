"""Tests for k6r.formatting."""

import pytest

from k6r.domain.models import MetricKind
from k6r.formatting import (
    format_count,
    format_duration,
    format_number,
    format_percent,
    format_rate,
    format_value,
    to_uint,
)


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("ms", "expected"),
        [
            (0.5, "500.00µs"),
            (1.0, "1.00ms"),
            (150.5, "150.50ms"),
            (1500.0, "1.50s"),
            (90000.0, "1.50m"),
            (60000.0, "1.00m"),
            (0.0, "0.00µs"),
        ],
    )
    def test_units(self, ms: float, expected: str) -> None:
        assert format_duration(ms) == expected


class TestFormatCount:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (50.0, "50"),
            (1500.0, "1.50K"),
            (2500000.0, "2.50M"),
            (999.0, "999"),
            (1000.0, "1.00K"),
        ],
    )
    def test_suffixes(self, count: float, expected: str) -> None:
        assert format_count(count) == expected

    def test_truncates_fraction(self) -> None:
        assert format_count(49.9) == "49"

    def test_negative_clamps_to_zero(self) -> None:
        assert format_count(-5.0) == "0"


class TestToUint:
    def test_nan_is_zero(self) -> None:
        assert to_uint(float("nan")) == 0

    def test_truncates(self) -> None:
        assert to_uint(10.99) == 10


class TestSimpleFormats:
    def test_percent(self) -> None:
        assert format_percent(0.0) == "0.00%"
        assert format_percent(0.5) == "50.00%"
        assert format_percent(1.0) == "100.00%"

    def test_rate(self) -> None:
        assert format_rate(10.0) == "10.00/s"

    def test_number(self) -> None:
        assert format_number(3.14159) == "3.14"


class TestFormatValue:
    def test_time_metric_always_duration(self) -> None:
        assert format_value(1500.0, "count", "time", MetricKind.COUNTER) == "1.50s"

    def test_counter_rate(self) -> None:
        assert format_value(12.0, "rate", "default", MetricKind.COUNTER) == "12.00/s"

    def test_rate_rate_is_percent(self) -> None:
        assert format_value(0.25, "rate", "default", MetricKind.RATE) == "25.00%"

    def test_rate_key_on_other_kinds_is_plain(self) -> None:
        assert format_value(0.25, "rate", "default", MetricKind.TREND) == "0.25"

    def test_count_keys(self) -> None:
        assert format_value(2000.0, "passes", "", MetricKind.RATE) == "2.00K"
        assert format_value(3.0, "fails", "", MetricKind.RATE) == "3"

    def test_everything_else_plain(self) -> None:
        assert format_value(7.0, "value", "data", MetricKind.GAUGE) == "7.00"
