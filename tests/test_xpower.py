"""Tests for the time-decayed swimming power estimate."""

import math

import pytest

from metrics.activity import Sample
from metrics.xpower import (
    XPowerResult,
    estimate_xpower,
    swimming_power,
    swimming_speed,
)


def _steady(speed, n, interval=1.0):
    return [Sample(secs=i * interval, speed=speed) for i in range(n)]


class TestDragModel:
    def test_power(self):
        assert swimming_power(70, 1.2) == pytest.approx((0.35 * 70 + 2) / 0.6 * 1.2 ** 3)

    def test_speed_inverts_power(self):
        for weight, speed in [(70, 1.2), (55, 0.8), (90, 1.6)]:
            assert swimming_speed(weight, swimming_power(weight, speed)) == pytest.approx(speed)

    def test_speed_of_no_power(self):
        assert swimming_speed(70, 0) == 0.0
        assert swimming_speed(70, -5) == 0.0


class TestEstimate:
    def test_one_hour_steady_swim(self):
        result = estimate_xpower(_steady(1.2, 3600), 1.0, 70)
        assert result.value == pytest.approx(76.3, rel=0.005)
        assert result.duration == 3600

    def test_converges_to_steady_state_power(self):
        result = estimate_xpower(_steady(1.0, 20000), 1.0, 80)
        assert result.value == pytest.approx(swimming_power(80, 1.0), rel=0.002)

    def test_backward_speed_counts_as_no_power(self):
        result = estimate_xpower(_steady(-0.5, 10), 1.0, 70)
        assert result == XPowerResult(0.0, 10.0)

    def test_backward_speed_mixed_with_forward(self):
        samples = _steady(1.2, 600) + [Sample(secs=600 + i, speed=-0.5) for i in range(60)]
        result = estimate_xpower(samples, 1.0, 70)
        assert 0 < result.value < estimate_xpower(_steady(1.2, 600), 1.0, 70).value
        assert result.duration == 660

    def test_no_samples(self):
        assert estimate_xpower([], 1.0, 70) == XPowerResult(0.0, 0.0)

    @pytest.mark.parametrize("interval", [0, -1, None, math.nan])
    def test_degenerate_interval(self, interval):
        assert estimate_xpower(_steady(1.2, 100), interval, 70) == XPowerResult(0.0, 0.0)

    def test_gap_of_three_intervals_adds_two_steps(self):
        samples = [Sample(secs=0, speed=1.2), Sample(secs=3, speed=1.2)]
        result = estimate_xpower(samples, 1.0, 70)
        # two real steps plus two decay-only steps
        assert result.duration == 4

    def test_no_gap_within_tolerance(self):
        samples = [Sample(secs=0, speed=1.2), Sample(secs=1.05, speed=1.2)]
        assert estimate_xpower(samples, 1.0, 70).duration == 2

    def test_gap_stops_when_effort_negligible(self):
        samples = [Sample(secs=0, speed=1.2), Sample(secs=10000, speed=1.2)]
        result = estimate_xpower(samples, 1.0, 70)
        assert 2 < result.duration < 10000

    def test_gap_after_standing_start_adds_nothing(self):
        samples = [Sample(secs=0, speed=0.0), Sample(secs=30, speed=1.0)]
        assert estimate_xpower(samples, 1.0, 70).duration == 2

    def test_pause_lowers_estimate(self):
        steady = estimate_xpower(_steady(1.2, 600), 1.0, 70)
        paused = _steady(1.2, 300) + [Sample(secs=400 + i, speed=1.2) for i in range(300)]
        assert estimate_xpower(paused, 1.0, 70).value < steady.value

    def test_coarse_interval_scales_duration(self):
        result = estimate_xpower(_steady(1.2, 720, interval=5.0), 5.0, 70)
        assert result.duration == 3600
        assert result.value > 0
