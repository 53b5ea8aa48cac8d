"""
Request Schemas
===============

Pydantic models for requests received by the HTTP service.

Sample Contract:
    {
        "timestamp": 1707321234000,
        "speed": 52.3,
        "acceleration": 0.41,
        "yawRate": -0.02,
        "steeringAngle": 12.5
    }

Physical plausibility of values is NOT validated; only the shape is.

Example:
    from telemetry_chain.models.input import BuildSegmentRequest

    request = BuildSegmentRequest.model_validate_json(raw)
    samples = request.to_samples()
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from telemetry_chain.models.policy import Policy
from telemetry_chain.models.sample import SensorSample
from telemetry_chain.models.segment import AggregatedMetrics, HashChainSummary, Segment


class SampleMessage(BaseModel):
    """Schema for one sensor sample on the wire."""

    timestamp: float = Field(..., description="Epoch milliseconds")
    speed: float = Field(..., description="Speed (km/h)")
    acceleration: float = Field(..., description="Acceleration (m/s²)")
    yaw_rate: float = Field(..., alias="yawRate", description="Yaw rate (rad/s)")
    steering_angle: float = Field(
        ...,
        alias="steeringAngle",
        description="Steering angle (degrees)",
    )

    class Config:
        """Pydantic model configuration."""

        populate_by_name = True

    def to_sample(self) -> SensorSample:
        return SensorSample(
            timestamp=self.timestamp,
            speed=self.speed,
            acceleration=self.acceleration,
            yaw_rate=self.yaw_rate,
            steering_angle=self.steering_angle,
        )


class _SampleBatch(BaseModel):
    samples: List[SampleMessage] = Field(default_factory=list)

    class Config:
        """Pydantic model configuration."""

        populate_by_name = True

    def to_samples(self) -> List[SensorSample]:
        return [message.to_sample() for message in self.samples]


class BuildSegmentRequest(_SampleBatch):
    """Build a segment from a complete batch of samples."""

    segment_start_time: float = Field(..., alias="segmentStartTime")
    expected_count: Optional[int] = Field(
        default=None,
        ge=1,
        alias="expectedCount",
        description="Defaults to the configured segment duration",
    )


class VerifyChainRequest(_SampleBatch):
    """Recompute a chain and compare it with a claimed summary."""

    hash_chain: HashChainSummary = Field(..., alias="hashChain")


class VerifySegmentRequest(_SampleBatch):
    """Cross-check a full segment against its raw samples."""

    segment: Segment


class IngestRequest(_SampleBatch):
    """Append samples to the service's streaming segment processor."""


class SimulateRequest(BaseModel):
    """Generate a synthetic batch and build its segment."""

    start_time: float = Field(..., ge=0, alias="startTime")
    seed: Optional[int] = Field(default=None, ge=0)

    class Config:
        """Pydantic model configuration."""

        populate_by_name = True


class PolicyCheckRequest(BaseModel):
    """Check aggregated metrics against a policy (or the configured default)."""

    aggregated_metrics: AggregatedMetrics = Field(..., alias="aggregatedMetrics")
    policy: Optional[Policy] = None

    class Config:
        """Pydantic model configuration."""

        populate_by_name = True
