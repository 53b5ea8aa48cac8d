"""
Chain Module
============

Deterministic encoding, hash chain folding and verification.
"""

from telemetry_chain.chain.builder import (
    SEGMENT_DURATION_SEC,
    build_segment,
    compute_digest,
    compute_hash_chain,
)
from telemetry_chain.chain.encoder import RECORD_SIZE, encode
from telemetry_chain.chain.verification import (
    SegmentVerification,
    verify_chain,
    verify_segment,
)

__all__ = [
    "RECORD_SIZE",
    "SEGMENT_DURATION_SEC",
    "encode",
    "compute_digest",
    "compute_hash_chain",
    "build_segment",
    "SegmentVerification",
    "verify_chain",
    "verify_segment",
]
