"""
Data Models
===========

Value types for the telemetry-chain package.

Models:
    Sample:
        - SensorSample: One immutable telemetry reading

    Segment:
        - FieldStats: avg/max/min of one field
        - AggregatedMetrics: FieldStats per numeric field
        - HashChainSummary: First and last chain digest
        - Segment: Complete segment record

    Policy:
        - Policy: Optional driving limits
        - PolicyResult: Pass/fail plus reasons
"""

from telemetry_chain.models.sample import SensorSample
from telemetry_chain.models.segment import (
    AggregatedMetrics,
    FieldStats,
    HashChainSummary,
    Segment,
)
from telemetry_chain.models.policy import Policy, PolicyResult

__all__ = [
    # Sample
    "SensorSample",
    # Segment
    "FieldStats",
    "AggregatedMetrics",
    "HashChainSummary",
    "Segment",
    # Policy
    "Policy",
    "PolicyResult",
]
