"""
Aggregator Tests
================
"""

import math

import pytest

from telemetry_chain.chain.builder import build_segment
from telemetry_chain.models.sample import SensorSample
from telemetry_chain.segments.aggregator import aggregate_field, aggregate_metrics


class TestAggregateField:

    def test_known_values(self):
        stats = aggregate_field([1.0, 2.0, 3.0, 6.0])
        assert stats.avg == 3.0
        assert stats.max == 6.0
        assert stats.min == 1.0

    def test_single_value(self):
        stats = aggregate_field([-4.25])
        assert stats.avg == stats.max == stats.min == -4.25

    def test_all_negative(self):
        stats = aggregate_field([-3.0, -1.0, -2.0])
        assert stats.max == -1.0
        assert stats.min == -3.0

    def test_empty_is_zero(self):
        stats = aggregate_field([])
        assert (stats.avg, stats.max, stats.min) == (0.0, 0.0, 0.0)

    def test_sequential_sum(self):
        values = [0.1, 0.2, 0.3]
        total = 0.0
        for value in values:
            total += value
        assert aggregate_field(values).avg == total / 3

    @pytest.mark.parametrize("value", [0.1, 0.3, 0.7, 1.1, 33.3, 88.8, -0.1])
    def test_constant_field_avg_within_bounds(self, value):
        """Summation rounding must not push avg outside [min, max]."""
        stats = aggregate_field([value] * 60)
        assert stats.min == stats.max == value
        assert stats.min <= stats.avg <= stats.max
        assert stats.avg == value

    def test_all_nan(self):
        stats = aggregate_field([float("nan")] * 60)
        assert math.isnan(stats.avg)
        assert math.isnan(stats.max)
        assert math.isnan(stats.min)

    def test_mixed_nan(self):
        stats = aggregate_field([1.0, float("nan"), 3.0])
        assert math.isnan(stats.avg)
        assert math.isnan(stats.max)
        assert math.isnan(stats.min)

    def test_infinity_kept_as_bound(self):
        stats = aggregate_field([1.0, float("inf")])
        assert stats.max == float("inf")
        assert stats.min == 1.0
        assert stats.avg == float("inf")


class TestAggregateMetrics:

    def test_ramp(self, ramp_samples):
        metrics = aggregate_metrics(ramp_samples)
        assert metrics.speed.min == 0.0
        assert metrics.speed.max == 59.0
        assert metrics.speed.avg == pytest.approx(29.5)
        assert metrics.steering_angle.min == -300.0
        assert metrics.steering_angle.max == 290.0
        assert metrics.acceleration.min == pytest.approx(-1.5)

    def test_steady_cruise_segment(self, segment_start):
        samples = [
            SensorSample(segment_start + i * 1000, 88.8, 0.0, 0.0, 0.7)
            for i in range(60)
        ]
        metrics = build_segment(samples, segment_start).aggregated_metrics
        for stats in (metrics.speed, metrics.steering_angle):
            assert stats.min <= stats.avg <= stats.max
        assert metrics.speed.avg == 88.8
        assert metrics.steering_angle.avg == 0.7

    def test_bounds_hold(self, minute_samples):
        metrics = aggregate_metrics(minute_samples)
        for stats in (
            metrics.speed,
            metrics.acceleration,
            metrics.yaw_rate,
            metrics.steering_angle,
        ):
            assert stats.min <= stats.avg <= stats.max

    def test_empty(self):
        metrics = aggregate_metrics([])
        dumped = metrics.model_dump(by_alias=True)
        for stats in dumped.values():
            assert stats == {"avg": 0.0, "max": 0.0, "min": 0.0}
