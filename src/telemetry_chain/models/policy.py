"""
Policy Models
=============

Threshold configuration and result of the policy check.

A Policy is an explicit value handed to the check. Each limit is optional;
a missing limit disables that check.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, Field


class Policy(BaseModel):
    """
    Driving policy limits.

    Attributes:
        max_speed: Upper bound on ``speed.max`` (km/h)
        max_acceleration: Upper bound on ``|acceleration.max|`` (m/s²)
        max_yaw_rate: Upper bound on ``|yawRate.max|`` (rad/s)
        max_steering_angle: Upper bound on ``|steeringAngle.max|`` (degrees)
    """

    max_speed: Optional[float] = Field(
        default=None,
        ge=0,
        alias="maxSpeed",
        description="Speed limit in km/h",
    )

    max_acceleration: Optional[float] = Field(
        default=None,
        ge=0,
        alias="maxAcceleration",
        description="Acceleration limit in m/s²",
    )

    max_yaw_rate: Optional[float] = Field(
        default=None,
        ge=0,
        alias="maxYawRate",
        description="Yaw rate limit in rad/s",
    )

    max_steering_angle: Optional[float] = Field(
        default=None,
        ge=0,
        alias="maxSteeringAngle",
        description="Steering angle limit in degrees",
    )

    class Config:
        """Pydantic model configuration."""

        frozen = True
        populate_by_name = True


@dataclass(frozen=True)
class PolicyResult:
    """Outcome of a policy evaluation."""

    passed: bool
    reasons: List[str] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"PolicyResult(passed={self.passed}, reasons={len(self.reasons)})"

    def to_dict(self) -> dict:
        return {"passed": self.passed, "reasons": list(self.reasons)}
