"""
Sensor Sample Model
===================

One telemetry reading taken once per second by the vehicle.

Interchange Contract:
    {
        "timestamp": 1707321234000.0,
        "speed": 52.3,
        "acceleration": 0.41,
        "yawRate": -0.02,
        "steeringAngle": 12.5
    }

Units:
    timestamp       milliseconds since epoch (integer-valued, stored as float64)
    speed           km/h
    acceleration    m/s²
    yawRate         rad/s
    steeringAngle   degrees
"""

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class SensorSample:
    """
    Immutable telemetry reading.

    Field order here is the order in which the encoder serializes the
    numeric fields.

    Attributes:
        timestamp: Epoch milliseconds
        speed: Vehicle speed (km/h)
        acceleration: Longitudinal acceleration (m/s²)
        yaw_rate: Yaw rate (rad/s)
        steering_angle: Steering wheel angle (degrees)
    """

    timestamp: float
    speed: float
    acceleration: float
    yaw_rate: float
    steering_angle: float

    def __repr__(self) -> str:
        return (
            f"SensorSample(t={self.timestamp:.0f}, "
            f"speed={self.speed:.2f}, "
            f"accel={self.acceleration:.2f}, "
            f"yaw={self.yaw_rate:.3f}, "
            f"steer={self.steering_angle:.1f})"
        )

    def to_dict(self) -> dict:
        """Export with interchange (camelCase) field names."""
        return {
            "timestamp": self.timestamp,
            "speed": self.speed,
            "acceleration": self.acceleration,
            "yawRate": self.yaw_rate,
            "steeringAngle": self.steering_angle,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SensorSample":
        """Build a sample from an interchange dict."""
        return cls(
            timestamp=float(data["timestamp"]),
            speed=float(data["speed"]),
            acceleration=float(data["acceleration"]),
            yaw_rate=float(data["yawRate"]),
            steering_angle=float(data["steeringAngle"]),
        )
