"""
Metric Aggregator
=================

Per-field statistics over a segment's samples.

Statistics:
    avg = sum / count    (sequential sum in sample order)
    max, min             (linear scan)

Rounding in the sequential sum can push ``avg`` a few ulps outside
``[min, max]`` (e.g. a constant field), so ``avg`` is clamped to the bounds.
Any NaN value makes ``max`` and ``min`` NaN as well.

An empty input produces ``avg = max = min = 0``.

These aggregates are computed from the same samples as the hash chain but
are not bound by it. ``verify_segment`` recomputes them to cross-check a
reported segment.
"""

import math
from typing import Iterable, Sequence

from telemetry_chain.models.sample import SensorSample
from telemetry_chain.models.segment import AggregatedMetrics, FieldStats


def aggregate_field(values: Iterable[float]) -> FieldStats:
    """Compute avg/max/min for one field."""
    total = 0.0
    count = 0
    high = float("-inf")
    low = float("inf")
    saw_nan = False

    for value in values:
        total += value
        count += 1
        if math.isnan(value):
            saw_nan = True
            continue
        if value > high:
            high = value
        if value < low:
            low = value

    if count == 0:
        return FieldStats(avg=0.0, max=0.0, min=0.0)

    if saw_nan:
        nan = float("nan")
        return FieldStats(avg=nan, max=nan, min=nan)

    avg = min(max(total / count, low), high)
    return FieldStats(avg=avg, max=high, min=low)


def aggregate_metrics(samples: Sequence[SensorSample]) -> AggregatedMetrics:
    """
    Aggregate every numeric field across ``samples``.

    Args:
        samples: Samples of one segment, in order

    Returns:
        AggregatedMetrics for speed, acceleration, yaw rate and steering angle
    """
    return AggregatedMetrics(
        speed=aggregate_field(s.speed for s in samples),
        acceleration=aggregate_field(s.acceleration for s in samples),
        yaw_rate=aggregate_field(s.yaw_rate for s in samples),
        steering_angle=aggregate_field(s.steering_angle for s in samples),
    )
