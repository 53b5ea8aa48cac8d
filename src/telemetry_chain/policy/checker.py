"""
Policy Checker
==============

Bounds checks of aggregated segment metrics against a driving policy.

Rules:
    maxSpeed          speed.max > limit
    maxAcceleration   |acceleration.max| > limit
    maxYawRate        |yawRate.max| > limit
    maxSteeringAngle  |steeringAngle.max| > limit

A limit that is not set disables its rule. The policy is always passed in
explicitly; defaults live in configuration.
"""

import logging
from typing import List, Sequence

from telemetry_chain.models.policy import Policy, PolicyResult
from telemetry_chain.models.segment import AggregatedMetrics, Segment


logger = logging.getLogger(__name__)


def check_metrics_against_policy(metrics: AggregatedMetrics, policy: Policy) -> PolicyResult:
    """
    Check one segment's aggregated metrics.

    Args:
        metrics: Aggregated metrics to check
        policy: Limits to evaluate against

    Returns:
        PolicyResult listing every violated limit
    """
    reasons: List[str] = []

    if policy.max_speed is not None:
        if metrics.speed.max > policy.max_speed:
            reasons.append(
                f"Speed exceeds limit: {metrics.speed.max:.2f} km/h > {policy.max_speed} km/h"
            )

    if policy.max_acceleration is not None:
        acceleration = abs(metrics.acceleration.max)
        if acceleration > policy.max_acceleration:
            reasons.append(
                f"Acceleration exceeds limit: {acceleration:.2f} m/s² > "
                f"{policy.max_acceleration} m/s²"
            )

    if policy.max_yaw_rate is not None:
        yaw_rate = abs(metrics.yaw_rate.max)
        if yaw_rate > policy.max_yaw_rate:
            reasons.append(
                f"Yaw rate exceeds limit: {yaw_rate:.2f} rad/s > {policy.max_yaw_rate} rad/s"
            )

    if policy.max_steering_angle is not None:
        steering = abs(metrics.steering_angle.max)
        if steering > policy.max_steering_angle:
            reasons.append(
                f"Steering angle exceeds limit: {steering:.2f}° > {policy.max_steering_angle}°"
            )

    return PolicyResult(passed=not reasons, reasons=reasons)


def evaluate_segments(segments: Sequence[Segment], policy: Policy) -> PolicyResult:
    """
    Check a sequence of segments, e.g. all segments of one trip.

    Failing reasons are prefixed with the segment index and start time.
    """
    reasons: List[str] = []

    for index, segment in enumerate(segments):
        result = check_metrics_against_policy(segment.aggregated_metrics, policy)
        if not result.passed:
            reasons.append(
                f"Segment {index} (start {segment.segment_start_time:.0f}): "
                f"{', '.join(result.reasons)}"
            )

    if reasons:
        logger.info(f"Policy check failed for {len(reasons)}/{len(segments)} segments")

    return PolicyResult(passed=not reasons, reasons=reasons)
