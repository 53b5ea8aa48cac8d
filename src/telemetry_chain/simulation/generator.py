"""
Synthetic Sensor Data
=====================

Seeded generator of plausible per-second telemetry for demos and fixtures.

Distributions (uniform):
    speed           max(0, U(30, 90) + U(-5, 5))   km/h
    acceleration    U(-3, 3)                       m/s²
    yawRate         U(-0.5, 0.5)                   rad/s
    steeringAngle   U(-540, 540)                   degrees

A fixed seed reproduces the same batch across runs.
"""

import logging
from typing import List, Optional

import numpy as np

from telemetry_chain.models.sample import SensorSample


logger = logging.getLogger(__name__)


class SensorDataGenerator:
    """
    Random sample source backed by ``numpy.random.Generator``.

    Example:
        generator = SensorDataGenerator(seed=42)
        samples = generator.batch(start_time_ms=1_700_000_000_000, duration_sec=60)
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        logger.info(f"SensorDataGenerator initialized: seed={seed}")

    def batch(
        self,
        start_time_ms: float,
        duration_sec: int,
        interval_ms: float = 1000.0,
    ) -> List[SensorSample]:
        """
        Generate one sample per interval.

        Args:
            start_time_ms: Timestamp of the first sample (epoch ms)
            duration_sec: Number of samples to generate
            interval_ms: Spacing between samples

        Returns:
            ``duration_sec`` samples with increasing timestamps
        """
        if duration_sec < 0:
            raise ValueError("duration_sec must be non-negative")

        draws = self._rng.random((duration_sec, 5))

        base_speed = 30.0 + draws[:, 0] * 60.0
        speed = np.maximum(0.0, base_speed + (draws[:, 1] - 0.5) * 10.0)
        acceleration = (draws[:, 2] - 0.5) * 6.0
        yaw_rate = (draws[:, 3] - 0.5) * 1.0
        steering_angle = (draws[:, 4] - 0.5) * 1080.0

        return [
            SensorSample(
                timestamp=float(start_time_ms + i * interval_ms),
                speed=float(speed[i]),
                acceleration=float(acceleration[i]),
                yaw_rate=float(yaw_rate[i]),
                steering_angle=float(steering_angle[i]),
            )
            for i in range(duration_sec)
        ]

    def sample(self, timestamp: float) -> SensorSample:
        """Generate a single sample at ``timestamp``."""
        return self.batch(timestamp, 1)[0]
