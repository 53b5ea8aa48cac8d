"""
Chain Builder
=============

Folds an ordered sample sequence into a SHA-256 hash chain and assembles
the segment record.

Algorithm:
    1. Reject any sample count other than ``expected_count``
    2. previous = 32 zero bytes (each segment's chain is self-contained)
    3. For each sample: digest = SHA256(encode(previous, sample));
       previous = digest
    4. hashChain = (first digest, last digest)
    5. Aggregate statistics independently of the chain
    6. Return the Segment

The builder is a pure function of its inputs: no clock, no random state,
no shared mutable state. It is safe to call concurrently on disjoint inputs.
"""

import logging
from typing import List, Sequence

from telemetry_chain.chain.digest import ZERO_DIGEST, digest_to_hex, sha256
from telemetry_chain.chain.encoder import encode
from telemetry_chain.exceptions import SampleCountMismatch
from telemetry_chain.models.sample import SensorSample
from telemetry_chain.models.segment import HashChainSummary, Segment
from telemetry_chain.segments.aggregator import aggregate_metrics


logger = logging.getLogger(__name__)


SEGMENT_DURATION_SEC = 60


def compute_digest(previous_digest: bytes, sample: SensorSample) -> bytes:
    """Single fold step: ``SHA256(encode(previous_digest, sample))``."""
    return sha256(encode(previous_digest, sample))


def compute_hash_chain(samples: Sequence[SensorSample]) -> List[bytes]:
    """
    Compute the full digest chain for ``samples``.

    Args:
        samples: Ordered samples

    Returns:
        One 32-byte digest per sample, in order
    """
    digests: List[bytes] = []
    previous = ZERO_DIGEST

    for sample in samples:
        previous = compute_digest(previous, sample)
        digests.append(previous)

    return digests


def summarize_chain(digests: Sequence[bytes]) -> HashChainSummary:
    """Reduce a non-empty digest chain to its (start, end) pair."""
    return HashChainSummary(
        start=digest_to_hex(digests[0]),
        end=digest_to_hex(digests[-1]),
    )


def build_segment(
    samples: Sequence[SensorSample],
    segment_start_time: float,
    expected_count: int = SEGMENT_DURATION_SEC,
) -> Segment:
    """
    Build a hash-chained segment from exactly ``expected_count`` samples.

    Args:
        samples: Ordered samples, one per second
        segment_start_time: Segment start (epoch milliseconds)
        expected_count: Required sample count (60 for a one-minute segment)

    Returns:
        Complete, internally consistent Segment

    Raises:
        ValueError: If ``expected_count`` is less than 1
        SampleCountMismatch: If ``len(samples) != expected_count``
    """
    if expected_count < 1:
        raise ValueError("expected_count must be at least 1")
    if len(samples) != expected_count:
        raise SampleCountMismatch(expected=expected_count, actual=len(samples))

    digests = compute_hash_chain(samples)
    hash_chain = summarize_chain(digests)

    logger.debug(
        f"Segment chain built: start_time={segment_start_time:.0f}, "
        f"samples={len(samples)}, end={hash_chain.end[:16]}..."
    )

    return Segment(
        segment_start_time=float(segment_start_time),
        duration_sec=expected_count,
        aggregated_metrics=aggregate_metrics(samples),
        hash_chain=hash_chain,
    )
