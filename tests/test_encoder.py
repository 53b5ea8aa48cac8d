"""
Encoder Tests
=============

Byte layout and contract checks for the record encoder.
"""

import math
import struct

import pytest

from telemetry_chain.chain.digest import ZERO_DIGEST
from telemetry_chain.chain.encoder import RECORD_SIZE, encode
from telemetry_chain.exceptions import InvalidDigestLength, SegmentChainError
from telemetry_chain.models.sample import SensorSample


class TestEncodeLayout:
    """Tests for the 72-byte record layout."""

    def test_record_size(self, reference_sample):
        record = encode(ZERO_DIGEST, reference_sample)
        assert RECORD_SIZE == 72
        assert len(record) == 72

    def test_reference_record_bytes(self, reference_sample):
        """timestamp=1000.0 and speed=50.0 as big-endian IEEE-754 doubles."""
        expected = (
            bytes(32)
            + bytes.fromhex("408f400000000000")
            + bytes.fromhex("4049000000000000")
            + bytes(24)
        )
        assert encode(ZERO_DIGEST, reference_sample) == expected

    def test_previous_digest_prefix(self, reference_sample):
        previous = bytes(range(32))
        record = encode(previous, reference_sample)
        assert record[:32] == previous

    def test_field_order(self):
        sample = SensorSample(
            timestamp=1.0,
            speed=2.0,
            acceleration=3.0,
            yaw_rate=4.0,
            steering_angle=5.0,
        )
        record = encode(ZERO_DIGEST, sample)
        assert struct.unpack(">5d", record[32:]) == (1.0, 2.0, 3.0, 4.0, 5.0)

    def test_negative_zero_differs_from_zero(self, reference_sample):
        """Signed zero is a distinct bit pattern."""
        negative = SensorSample(1000.0, 50.0, -0.0, 0.0, 0.0)
        assert encode(ZERO_DIGEST, negative) != encode(ZERO_DIGEST, reference_sample)

    def test_infinity_bit_pattern(self):
        sample = SensorSample(0.0, float("inf"), float("-inf"), 0.0, 0.0)
        record = encode(ZERO_DIGEST, sample)
        assert record[40:48] == bytes.fromhex("7ff0000000000000")
        assert record[48:56] == bytes.fromhex("fff0000000000000")

    def test_nan_is_encoded(self):
        sample = SensorSample(0.0, float("nan"), 0.0, 0.0, 0.0)
        record = encode(ZERO_DIGEST, sample)
        assert len(record) == 72
        assert math.isnan(struct.unpack(">d", record[40:48])[0])

    def test_bytearray_digest_accepted(self, reference_sample):
        assert encode(bytearray(32), reference_sample) == encode(ZERO_DIGEST, reference_sample)


class TestEncodeContract:
    """Tests for previous-digest validation."""

    @pytest.mark.parametrize("length", [0, 31, 33, 64])
    def test_wrong_length_rejected(self, reference_sample, length):
        with pytest.raises(InvalidDigestLength) as excinfo:
            encode(bytes(length), reference_sample)
        assert excinfo.value.length == length

    def test_error_hierarchy(self, reference_sample):
        with pytest.raises(SegmentChainError):
            encode(bytes(16), reference_sample)
        with pytest.raises(ValueError):
            encode(bytes(16), reference_sample)

    def test_hex_string_rejected(self, reference_sample):
        with pytest.raises(TypeError):
            encode("00" * 32, reference_sample)
