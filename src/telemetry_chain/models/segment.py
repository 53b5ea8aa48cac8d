"""
Segment Models
==============

Output contract of the chain builder.

A Segment is what a credential issuer embeds verbatim as the
``credentialSubject`` of a signed envelope:

    {
        "segmentStartTime": 1707321234000.0,
        "durationSec": 60,
        "aggregatedMetrics": {
            "speed": {"avg": 61.2, "max": 88.4, "min": 33.0},
            "acceleration": {"avg": 0.1, "max": 2.8, "min": -2.9},
            "yawRate": {"avg": 0.0, "max": 0.49, "min": -0.47},
            "steeringAngle": {"avg": 4.1, "max": 530.2, "min": -512.7}
        },
        "hashChain": {
            "start": "<64 lowercase hex chars>",
            "end": "<64 lowercase hex chars>"
        }
    }

Design Rules:
    - Models are frozen once built
    - Python attributes are snake_case, serialized names are camelCase
    - Aggregates carry no cryptographic binding of their own
"""

import math

from pydantic import BaseModel, Field

from telemetry_chain.exceptions import NonFiniteAggregate


class FieldStats(BaseModel):
    """
    Statistics of one numeric field across a segment.

    For non-empty input ``min <= avg <= max``. Empty input yields all zeros.
    """

    avg: float = Field(default=0.0, description="Arithmetic mean")
    max: float = Field(default=0.0, description="Maximum value")
    min: float = Field(default=0.0, description="Minimum value")

    class Config:
        """Pydantic model configuration."""

        frozen = True


class AggregatedMetrics(BaseModel):
    """
    Per-field statistics for a segment.

    Attributes:
        speed: Speed statistics (km/h)
        acceleration: Acceleration statistics (m/s²)
        yaw_rate: Yaw rate statistics (rad/s)
        steering_angle: Steering angle statistics (degrees)
    """

    speed: FieldStats = Field(default_factory=FieldStats)
    acceleration: FieldStats = Field(default_factory=FieldStats)
    yaw_rate: FieldStats = Field(default_factory=FieldStats, alias="yawRate")
    steering_angle: FieldStats = Field(default_factory=FieldStats, alias="steeringAngle")

    class Config:
        """Pydantic model configuration."""

        frozen = True
        populate_by_name = True


class HashChainSummary(BaseModel):
    """
    First and last digest of a segment's hash chain.

    ``start`` is the digest of the first sample chained against the zero
    seed. ``end`` is the digest of the last sample. They are equal for a
    single-sample segment.

    Values are not validated here so that a claimed summary received from
    outside can reach the verifier, which rejects malformed digests with
    ``InvalidDigestFormat``.
    """

    start: str = Field(..., description="First digest (64 lowercase hex chars)")
    end: str = Field(..., description="Last digest (64 lowercase hex chars)")

    class Config:
        """Pydantic model configuration."""

        frozen = True


class Segment(BaseModel):
    """
    A fixed-duration batch of samples with integrity digests and statistics.

    Attributes:
        segment_start_time: Epoch milliseconds of the segment start
        duration_sec: Number of one-second samples consumed
        aggregated_metrics: Per-field statistics
        hash_chain: Start/end digests of the chain
    """

    segment_start_time: float = Field(
        ...,
        alias="segmentStartTime",
        description="Segment start (epoch milliseconds)",
    )

    duration_sec: int = Field(
        ...,
        ge=1,
        alias="durationSec",
        description="Exact number of samples consumed",
    )

    aggregated_metrics: AggregatedMetrics = Field(
        ...,
        alias="aggregatedMetrics",
        description="Per-field statistics",
    )

    hash_chain: HashChainSummary = Field(
        ...,
        alias="hashChain",
        description="Start and end digests of the hash chain",
    )

    class Config:
        """Pydantic model configuration."""

        frozen = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "segmentStartTime": 1707321234000.0,
                "durationSec": 60,
                "aggregatedMetrics": {
                    "speed": {"avg": 61.2, "max": 88.4, "min": 33.0},
                    "acceleration": {"avg": 0.1, "max": 2.8, "min": -2.9},
                    "yawRate": {"avg": 0.0, "max": 0.49, "min": -0.47},
                    "steeringAngle": {"avg": 4.1, "max": 530.2, "min": -512.7},
                },
                "hashChain": {"start": "0" * 64, "end": "f" * 64},
            }
        }

    def to_credential_subject(self) -> dict:
        """
        Plain dict with interchange field names, ready to embed as JSON.

        JSON has no NaN or infinity, and pydantic would emit them as ``null``,
        which no longer parses back into FieldStats. Such segments are
        rejected instead.

        Raises:
            NonFiniteAggregate: If any aggregate value is NaN or infinite
        """
        for name, stats in self.aggregated_metrics:
            for stat, value in stats:
                if not math.isfinite(value):
                    raise NonFiniteAggregate(
                        f"{name}.{stat} is {value!r}; segment cannot be serialized"
                    )
        return self.model_dump(mode="json", by_alias=True)
