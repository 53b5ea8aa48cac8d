"""
Segment Processor
=================

Groups a continuous sample stream into fixed-length hash-chained segments.

This processor:
    - Buffers incoming SensorSample values in arrival order
    - Builds a Segment once ``expected_count`` samples are buffered
    - Uses the first buffered sample's timestamp as the segment start
    - Starts every segment from a fresh buffer and the zero chain seed

One processor serves one vehicle stream. It holds mutable state and is not
meant to be shared across threads.
"""

import logging
from typing import List, Optional

from telemetry_chain.chain.builder import SEGMENT_DURATION_SEC, build_segment
from telemetry_chain.models.sample import SensorSample
from telemetry_chain.models.segment import Segment


logger = logging.getLogger(__name__)


class SegmentProcessor:
    """
    Streaming segment assembly.

    Attributes:
        expected_count: Samples per segment
        log_every_n_segments: Progress logging interval

    Example:
        processor = SegmentProcessor(expected_count=60)

        for sample in stream:
            segment = processor.update(sample)
            if segment is not None:
                issuer.issue(segment.to_credential_subject())
    """

    def __init__(
        self,
        expected_count: int = SEGMENT_DURATION_SEC,
        log_every_n_segments: int = 10,
    ) -> None:
        """
        Initialize segment processor.

        Args:
            expected_count: Number of samples per segment (one per second)
            log_every_n_segments: Log a progress line every N segments
        """
        if expected_count < 1:
            raise ValueError("expected_count must be at least 1")
        if log_every_n_segments < 1:
            raise ValueError("log_every_n_segments must be at least 1")

        self.expected_count = expected_count
        self.log_every_n_segments = log_every_n_segments

        # Internal state
        self._buffer: List[SensorSample] = []
        self._segment_count: int = 0
        self._sample_count: int = 0
        self._last_segment: Optional[Segment] = None

        logger.info(f"SegmentProcessor initialized: expected_count={expected_count}")

    def update(self, sample: SensorSample) -> Optional[Segment]:
        """
        Add one sample to the current segment.

        Args:
            sample: Next sample in stream order

        Returns:
            The completed Segment when this sample fills the buffer,
            otherwise None
        """
        self._sample_count += 1
        self._buffer.append(sample)

        if len(self._buffer) < self.expected_count:
            return None

        samples = self._buffer
        self._buffer = []

        segment = build_segment(
            samples,
            segment_start_time=samples[0].timestamp,
            expected_count=self.expected_count,
        )
        self._segment_count += 1
        self._last_segment = segment

        if self._segment_count % self.log_every_n_segments == 0:
            logger.info(
                f"Segment [{self._segment_count}]: "
                f"start={segment.segment_start_time:.0f}, "
                f"end_digest={segment.hash_chain.end[:16]}..."
            )

        return segment

    def reset(self) -> None:
        """Discard the partial segment and all counters."""
        dropped = len(self._buffer)
        self._buffer = []
        self._segment_count = 0
        self._sample_count = 0
        self._last_segment = None
        logger.info(f"SegmentProcessor reset (dropped {dropped} pending samples)")

    @property
    def pending_count(self) -> int:
        """Samples buffered toward the next segment."""
        return len(self._buffer)

    @property
    def segment_count(self) -> int:
        """Segments completed since the last reset."""
        return self._segment_count

    @property
    def last_segment(self) -> Optional[Segment]:
        return self._last_segment

    def get_metrics(self) -> dict:
        """Get processor metrics for observability."""
        return {
            "expected_count": self.expected_count,
            "samples_received": self._sample_count,
            "segments_completed": self._segment_count,
            "pending_samples": len(self._buffer),
        }
