"""
Error Kinds
===========

All errors raised by the segment-integrity core.

Every error here signals a caller contract violation. None of them are
transient and none are retried or swallowed by the core.
"""


class SegmentChainError(Exception):
    """Base class for all segment-integrity errors."""


class InvalidDigestLength(SegmentChainError, ValueError):
    """A previous-digest value is not exactly 32 bytes at encode time."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"previous digest must be 32 bytes, got {length}")


class SampleCountMismatch(SegmentChainError, ValueError):
    """The sample sequence does not have exactly the expected length."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} samples, got {actual}")


class InvalidDigestFormat(SegmentChainError, ValueError):
    """A claimed digest cannot be decoded to exactly 32 bytes."""


class NonFiniteAggregate(SegmentChainError, ValueError):
    """A segment aggregate is NaN or infinite and has no JSON representation."""
