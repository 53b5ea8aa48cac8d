"""
Chain Builder Tests
===================

Determinism, sensitivity, seed invariant and count enforcement.
"""

import dataclasses
import hashlib
import math

import pytest

from telemetry_chain.chain.builder import (
    build_segment,
    compute_digest,
    compute_hash_chain,
)
from telemetry_chain.chain.digest import ZERO_DIGEST
from telemetry_chain.chain.encoder import encode
from telemetry_chain.exceptions import NonFiniteAggregate, SampleCountMismatch


FIELDS = ["timestamp", "speed", "acceleration", "yaw_rate", "steering_angle"]


class TestSeedInvariant:
    """The first digest is chained against 32 zero bytes."""

    def test_first_digest(self, reference_sample):
        record = (
            bytes(32)
            + bytes.fromhex("408f400000000000")
            + bytes.fromhex("4049000000000000")
            + bytes(24)
        )
        expected = hashlib.sha256(record).hexdigest()

        segment = build_segment([reference_sample], 1000.0, expected_count=1)

        assert segment.hash_chain.start == expected
        assert len(segment.hash_chain.start) == 64
        assert segment.hash_chain.start == segment.hash_chain.start.lower()

    def test_repeated_runs_agree(self, reference_sample):
        first = compute_hash_chain([reference_sample])[0]
        second = compute_hash_chain([reference_sample])[0]
        assert first == second == compute_digest(ZERO_DIGEST, reference_sample)

    def test_chain_links(self, minute_samples):
        digests = compute_hash_chain(minute_samples)
        previous = ZERO_DIGEST
        for sample, digest in zip(minute_samples, digests):
            assert digest == hashlib.sha256(encode(previous, sample)).digest()
            previous = digest


class TestBuildSegment:
    """Tests for segment assembly."""

    def test_segment_fields(self, minute_samples, segment_start):
        segment = build_segment(minute_samples, segment_start)
        digests = compute_hash_chain(minute_samples)

        assert segment.segment_start_time == segment_start
        assert segment.duration_sec == 60
        assert segment.hash_chain.start == digests[0].hex()
        assert segment.hash_chain.end == digests[-1].hex()
        assert segment.hash_chain.start != segment.hash_chain.end

    def test_determinism(self, minute_samples, segment_start):
        first = build_segment(minute_samples, segment_start)
        second = build_segment(list(minute_samples), segment_start)
        assert first == second
        assert first.to_credential_subject() == second.to_credential_subject()

    def test_single_sample_chain(self, reference_sample):
        segment = build_segment([reference_sample], 1000.0, expected_count=1)
        assert segment.hash_chain.start == segment.hash_chain.end
        assert segment.duration_sec == 1

    def test_start_time_not_part_of_chain(self, minute_samples):
        a = build_segment(minute_samples, 0.0)
        b = build_segment(minute_samples, 5000.0)
        assert a.hash_chain == b.hash_chain
        assert a.segment_start_time != b.segment_start_time

    def test_credential_subject_shape(self, minute_samples, segment_start):
        subject = build_segment(minute_samples, segment_start).to_credential_subject()
        assert set(subject) == {
            "segmentStartTime",
            "durationSec",
            "aggregatedMetrics",
            "hashChain",
        }
        assert set(subject["aggregatedMetrics"]) == {
            "speed",
            "acceleration",
            "yawRate",
            "steeringAngle",
        }
        assert set(subject["aggregatedMetrics"]["speed"]) == {"avg", "max", "min"}
        assert set(subject["hashChain"]) == {"start", "end"}

    def test_non_finite_aggregate_not_serialized(self, minute_samples, segment_start):
        samples = list(minute_samples)
        samples[5] = dataclasses.replace(samples[5], speed=float("nan"))
        segment = build_segment(samples, segment_start)

        assert math.isnan(segment.aggregated_metrics.speed.max)
        with pytest.raises(NonFiniteAggregate, match="speed"):
            segment.to_credential_subject()

    def test_segment_is_frozen(self, minute_samples, segment_start):
        segment = build_segment(minute_samples, segment_start)
        with pytest.raises(Exception):
            segment.duration_sec = 30


class TestCountEnforcement:
    """Exactly expected_count samples are accepted."""

    @pytest.mark.parametrize("count", [59, 61, 0])
    def test_mismatch(self, minute_samples, segment_start, count):
        extra = dataclasses.replace(minute_samples[-1], timestamp=minute_samples[-1].timestamp + 1000)
        samples = (minute_samples + [extra])[:count]
        with pytest.raises(SampleCountMismatch) as excinfo:
            build_segment(samples, segment_start, expected_count=60)
        assert excinfo.value.expected == 60
        assert excinfo.value.actual == count

    def test_exact_count(self, minute_samples, segment_start):
        assert build_segment(minute_samples, segment_start, expected_count=60).duration_sec == 60

    def test_non_positive_expected_count(self, segment_start):
        with pytest.raises(ValueError, match="at least 1"):
            build_segment([], segment_start, expected_count=0)


class TestChainSensitivity:
    """Any single-field change is visible in the chain."""

    @pytest.mark.parametrize("index", [0, 29, 59])
    @pytest.mark.parametrize("field", FIELDS)
    def test_mutation_changes_end(self, minute_samples, segment_start, index, field):
        original = build_segment(minute_samples, segment_start)
        original_chain = compute_hash_chain(minute_samples)

        mutated = list(minute_samples)
        value = getattr(mutated[index], field)
        mutated[index] = dataclasses.replace(mutated[index], **{field: value + 0.5})
        mutated_chain = compute_hash_chain(mutated)

        assert build_segment(mutated, segment_start).hash_chain.end != original.hash_chain.end
        assert mutated_chain[:index] == original_chain[:index]
        for a, b in zip(mutated_chain[index:], original_chain[index:]):
            assert a != b

    def test_reordering_changes_end(self, minute_samples, segment_start):
        swapped = list(minute_samples)
        swapped[10], swapped[11] = swapped[11], swapped[10]
        assert (
            build_segment(swapped, segment_start).hash_chain.end
            != build_segment(minute_samples, segment_start).hash_chain.end
        )
