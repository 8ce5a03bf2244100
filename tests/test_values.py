"""Tests for metric values and aggregation."""

import pytest

from metrics.errors import DependencyMissing
from metrics.values import AggregationKind, MetricValue, ResultSet, aggregate_values


class TestMetricValue:
    def test_formatted(self):
        value = MetricValue("swimscore_xpace", 1.8333, precision=1, metric_units="min/100m",
                            imperial_units="min/100yd", conversion=0.9144)
        assert value.formatted() == "1.8 min/100m"
        assert value.formatted(metric=False) == "1.7 min/100yd"

    def test_formatted_without_units(self):
        assert MetricValue("swimscore_ri", 0.8765, precision=2).formatted() == "0.88"


class TestResultSetAccess:
    def test_require_absent(self):
        with pytest.raises(DependencyMissing):
            ResultSet().require("swimscore")

    def test_view_tracks_underlying_values(self):
        values = {}
        view = ResultSet.view(values)
        assert "a" not in view
        values["a"] = MetricValue("a", 1.0)
        assert view.value_of("a") == 1.0

    def test_copy_is_detached(self):
        values = {"a": MetricValue("a", 1.0)}
        result = ResultSet(values)
        values["b"] = MetricValue("b", 2.0)
        assert "b" not in result


class TestAggregate:
    def test_empty(self):
        assert aggregate_values([], AggregationKind.TOTAL) == 0.0

    def test_total(self):
        values = [MetricValue("swimscore", 40.0), MetricValue("swimscore", 60.0)]
        assert aggregate_values(values, AggregationKind.TOTAL) == 100.0

    def test_average_weighted_by_count(self):
        values = [
            MetricValue("swimscore_xpower", 100.0, count=3000.0),
            MetricValue("swimscore_xpower", 200.0, count=1000.0),
        ]
        assert aggregate_values(values, AggregationKind.AVERAGE) == pytest.approx(125.0)

    def test_average_without_counts(self):
        values = [MetricValue("swimscore_tp", 100.0), MetricValue("swimscore_tp", 200.0)]
        assert aggregate_values(values, AggregationKind.AVERAGE) == pytest.approx(150.0)

    def test_average_of_zero_duration(self):
        values = [MetricValue("swimscore_xpower", 0.0, count=0.0)]
        assert aggregate_values(values, AggregationKind.AVERAGE) == 0.0

    def test_peak_and_low(self):
        values = [MetricValue("x", v) for v in (3.0, 9.0, 1.0)]
        assert aggregate_values(values, AggregationKind.PEAK) == 9.0
        assert aggregate_values(values, AggregationKind.LOW) == 1.0
