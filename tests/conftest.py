"""
Test Configuration
==================

Pytest fixtures and test configuration for telemetry-chain.
"""

import pytest

from telemetry_chain.models.sample import SensorSample
from telemetry_chain.simulation.generator import SensorDataGenerator


SEGMENT_START_MS = 1_707_321_234_000.0


@pytest.fixture
def reference_sample():
    """Fixed sample with hand-computable encoding."""
    return SensorSample(
        timestamp=1000.0,
        speed=50.0,
        acceleration=0.0,
        yaw_rate=0.0,
        steering_angle=0.0,
    )


@pytest.fixture
def segment_start():
    return SEGMENT_START_MS


@pytest.fixture
def minute_samples():
    """Provide 60 seeded samples, one per second."""
    return SensorDataGenerator(seed=1234).batch(
        start_time_ms=SEGMENT_START_MS,
        duration_sec=60,
    )


@pytest.fixture
def ramp_samples():
    """Provide 60 deterministic samples with known statistics."""
    return [
        SensorSample(
            timestamp=SEGMENT_START_MS + i * 1000,
            speed=float(i),
            acceleration=-1.5 + i * 0.05,
            yaw_rate=0.01 * (i % 7) - 0.03,
            steering_angle=10.0 * (i - 30),
        )
        for i in range(60)
    ]
