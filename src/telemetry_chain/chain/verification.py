"""
Chain Verification
==================

Inverse of the chain builder: recompute from raw samples and compare.

Two levels are provided:
    - verify_chain: recompute the hash chain and compare start/end digests
    - verify_segment: verify_chain plus an exact recomputation of the
      reported sample count and aggregated metrics

A mismatch is a normal outcome (``False`` / ``verified=False``). A claimed
digest that is not a 64-character lowercase hex string is a caller error
and raises ``InvalidDigestFormat``.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence, Tuple, Union

from telemetry_chain.chain.builder import compute_hash_chain
from telemetry_chain.chain.digest import digests_equal, hex_to_digest
from telemetry_chain.exceptions import InvalidDigestFormat
from telemetry_chain.models.sample import SensorSample
from telemetry_chain.models.segment import HashChainSummary, Segment
from telemetry_chain.segments.aggregator import aggregate_metrics


logger = logging.getLogger(__name__)


ClaimedChain = Union[HashChainSummary, Mapping[str, Any]]

_METRIC_FIELDS = ("speed", "acceleration", "yaw_rate", "steering_angle")
_STAT_FIELDS = ("avg", "max", "min")


@dataclass(frozen=True)
class SegmentVerification:
    """
    Result of a full segment cross-check.

    Attributes:
        chain_valid: Recomputed start/end digests match the claim
        metrics_valid: Sample count and aggregates match the claim
        reasons: One entry per detected mismatch
    """

    chain_valid: bool
    metrics_valid: bool
    reasons: List[str] = field(default_factory=list)

    @property
    def verified(self) -> bool:
        return self.chain_valid and self.metrics_valid

    def to_dict(self) -> dict:
        return {
            "verified": self.verified,
            "chainValid": self.chain_valid,
            "metricsValid": self.metrics_valid,
            "reasons": list(self.reasons),
        }


def _claimed_digests(claimed: ClaimedChain) -> Tuple[bytes, bytes]:
    if isinstance(claimed, HashChainSummary):
        start, end = claimed.start, claimed.end
    elif isinstance(claimed, Mapping):
        if "start" not in claimed or "end" not in claimed:
            raise InvalidDigestFormat("claimed hash chain must have 'start' and 'end'")
        start, end = claimed["start"], claimed["end"]
    else:
        raise InvalidDigestFormat(
            f"claimed hash chain has unsupported type {type(claimed).__name__}"
        )
    return hex_to_digest(start), hex_to_digest(end)


def _same_value(a: float, b: float) -> bool:
    if math.isnan(a) and math.isnan(b):
        return True
    return a == b


def verify_chain(samples: Sequence[SensorSample], claimed_hash_chain: ClaimedChain) -> bool:
    """
    Recompute the hash chain of ``samples`` and compare with a claim.

    Args:
        samples: Raw samples, in the original order
        claimed_hash_chain: HashChainSummary or mapping with ``start``/``end``

    Returns:
        True if both the start and end digests match

    Raises:
        InvalidDigestFormat: If a claimed digest is malformed
    """
    claimed_start, claimed_end = _claimed_digests(claimed_hash_chain)

    digests = compute_hash_chain(samples)
    if not digests:
        logger.warning("Chain verification failed: no samples supplied")
        return False

    start_ok = digests_equal(digests[0], claimed_start)
    end_ok = digests_equal(digests[-1], claimed_end)

    if not (start_ok and end_ok):
        logger.warning(
            f"Chain verification failed: start_match={start_ok}, end_match={end_ok}, "
            f"samples={len(samples)}"
        )
        return False

    return True


def verify_segment(samples: Sequence[SensorSample], segment: Segment) -> SegmentVerification:
    """
    Cross-check a reported segment against its raw samples.

    Checks the hash chain, the sample count against ``durationSec`` and
    every aggregate value (exact float equality, since the aggregation is
    deterministic).

    Raises:
        InvalidDigestFormat: If the segment's digests are malformed
    """
    reasons: List[str] = []

    chain_valid = verify_chain(samples, segment.hash_chain)
    if not chain_valid:
        reasons.append("Hash chain does not match samples")

    metrics_valid = True
    if len(samples) != segment.duration_sec:
        metrics_valid = False
        reasons.append(
            f"Sample count mismatch: durationSec={segment.duration_sec}, "
            f"samples={len(samples)}"
        )

    recomputed = aggregate_metrics(samples)
    for metric in _METRIC_FIELDS:
        claimed_stats = getattr(segment.aggregated_metrics, metric)
        actual_stats = getattr(recomputed, metric)
        for stat in _STAT_FIELDS:
            claimed_value = getattr(claimed_stats, stat)
            actual_value = getattr(actual_stats, stat)
            if not _same_value(claimed_value, actual_value):
                metrics_valid = False
                reasons.append(
                    f"{metric}.{stat} mismatch: reported {claimed_value!r}, "
                    f"recomputed {actual_value!r}"
                )

    if reasons:
        logger.warning(f"Segment verification failed: {'; '.join(reasons)}")

    return SegmentVerification(
        chain_valid=chain_valid,
        metrics_valid=metrics_valid,
        reasons=reasons,
    )
