"""
Digest Utilities
================

SHA-256 helpers and the hex interchange codec for chain digests.

Digests are 32 raw bytes inside the package. Wherever they cross a
boundary they are 64-character lowercase hexadecimal strings; any other
encoding (uppercase, prefixed, wrong length, non-hex) is rejected.
"""

import hashlib
import hmac
import string
from typing import Any

from telemetry_chain.exceptions import InvalidDigestFormat


DIGEST_SIZE = 32
DIGEST_HEX_LENGTH = 2 * DIGEST_SIZE

# Chain seed: every segment's chain starts from 32 zero bytes.
ZERO_DIGEST = bytes(DIGEST_SIZE)

_LOWER_HEX = frozenset(string.hexdigits.lower())


def sha256(data: bytes) -> bytes:
    """Return the raw 32-byte SHA-256 digest of ``data``."""
    return hashlib.sha256(data).digest()


def digest_to_hex(digest: bytes) -> str:
    """Encode a raw digest as 64 lowercase hex characters."""
    return digest.hex()


def hex_to_digest(value: Any) -> bytes:
    """
    Decode an interchange digest.

    Args:
        value: Claimed digest, expected to be a 64-char lowercase hex string

    Returns:
        32 raw bytes

    Raises:
        InvalidDigestFormat: If the value is not a string, has the wrong
            length, or contains anything but lowercase hex digits
    """
    if not isinstance(value, str):
        raise InvalidDigestFormat(
            f"digest must be a hex string, got {type(value).__name__}"
        )
    if len(value) != DIGEST_HEX_LENGTH:
        raise InvalidDigestFormat(
            f"digest must be {DIGEST_HEX_LENGTH} hex characters, got {len(value)}"
        )
    if not _LOWER_HEX.issuperset(value):
        raise InvalidDigestFormat("digest must contain only lowercase hex characters")
    return bytes.fromhex(value)


def digests_equal(a: bytes, b: bytes) -> bool:
    """Constant-time digest comparison."""
    return hmac.compare_digest(a, b)
