"""
telemetry-chain
===============

Tamper-evident segments for periodic vehicle telemetry.

Per-second sensor samples are grouped into fixed-length segments, summarized
statistically and bound together by a SHA-256 hash chain. Any alteration,
reordering or removal of a sample inside a segment is detectable by
recomputing the chain from the raw samples.

Components:
    - chain: deterministic record encoding, hash chain folding, verification
    - segments: aggregate statistics and streaming segment assembly
    - policy: bounds checks over aggregated metrics
    - simulation: seeded synthetic sample source

Example:
    from telemetry_chain import build_segment, verify_chain
    from telemetry_chain.simulation import SensorDataGenerator

    samples = SensorDataGenerator(seed=7).batch(start_time_ms=0, duration_sec=60)
    segment = build_segment(samples, segment_start_time=0)
    assert verify_chain(samples, segment.hash_chain)
"""

__version__ = "0.1.0"
__author__ = "telemetry-chain contributors"

from telemetry_chain.chain.builder import build_segment, compute_hash_chain
from telemetry_chain.chain.encoder import encode
from telemetry_chain.chain.verification import verify_chain, verify_segment
from telemetry_chain.exceptions import (
    InvalidDigestFormat,
    InvalidDigestLength,
    NonFiniteAggregate,
    SampleCountMismatch,
    SegmentChainError,
)
from telemetry_chain.models.sample import SensorSample
from telemetry_chain.models.segment import (
    AggregatedMetrics,
    FieldStats,
    HashChainSummary,
    Segment,
)

__all__ = [
    "__version__",
    # Operations
    "encode",
    "build_segment",
    "compute_hash_chain",
    "verify_chain",
    "verify_segment",
    # Models
    "SensorSample",
    "FieldStats",
    "AggregatedMetrics",
    "HashChainSummary",
    "Segment",
    # Errors
    "SegmentChainError",
    "InvalidDigestLength",
    "SampleCountMismatch",
    "InvalidDigestFormat",
    "NonFiniteAggregate",
]
