"""
Record Encoder
==============

Deterministic binary encoding of one chain link.

Record Layout (72 bytes):
    offset  size  field
    0       32    previous digest
    32      8     timestamp
    40      8     speed
    48      8     acceleration
    56      8     yaw rate
    64      8     steering angle

Every numeric field is an IEEE-754 float64 in big-endian byte order, so the
same sample encodes to the same bytes on every platform and locale.
NaN and infinities are written with their IEEE-754 bit patterns; field
ranges are not validated here.
"""

import struct

from telemetry_chain.chain.digest import DIGEST_SIZE
from telemetry_chain.exceptions import InvalidDigestLength
from telemetry_chain.models.sample import SensorSample


_FIELDS = struct.Struct(">5d")

RECORD_SIZE = DIGEST_SIZE + _FIELDS.size


def encode(previous_digest: bytes, sample: SensorSample) -> bytes:
    """
    Serialize ``(previous_digest, sample)`` into a 72-byte record.

    Args:
        previous_digest: Digest of the previous link (32 bytes)
        sample: Sensor sample to append to the chain

    Returns:
        The 72-byte record

    Raises:
        TypeError: If ``previous_digest`` is not bytes-like
        InvalidDigestLength: If ``previous_digest`` is not exactly 32 bytes
    """
    if not isinstance(previous_digest, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"previous_digest must be bytes, got {type(previous_digest).__name__}"
        )
    previous_digest = bytes(previous_digest)
    if len(previous_digest) != DIGEST_SIZE:
        raise InvalidDigestLength(len(previous_digest))

    return previous_digest + _FIELDS.pack(
        sample.timestamp,
        sample.speed,
        sample.acceleration,
        sample.yaw_rate,
        sample.steering_angle,
    )
