"""
telemetry-chain Main Application
================================

FastAPI entry point for the segment integrity service.

Endpoints:
    GET  /                        - Service information
    GET  /health                  - Liveness probe
    GET  /metrics                 - Processor metrics and error counters
    POST /segments                - Build a segment from a complete batch
    POST /segments/verify         - Verify a claimed hash chain
    POST /segments/verify/full    - Cross-check chain and aggregates
    POST /segments/simulate       - Build a segment from synthetic samples
    POST /samples                 - Stream samples into the segment processor
    GET  /segments/latest         - Last segment completed from the stream
    POST /policy/check            - Check aggregated metrics against a policy
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from telemetry_chain.chain.builder import build_segment
from telemetry_chain.chain.verification import verify_chain, verify_segment
from telemetry_chain.config import settings, setup_logging
from telemetry_chain.exceptions import SegmentChainError
from telemetry_chain.models.input import (
    BuildSegmentRequest,
    IngestRequest,
    PolicyCheckRequest,
    SimulateRequest,
    VerifyChainRequest,
    VerifySegmentRequest,
)
from telemetry_chain.models.segment import Segment
from telemetry_chain.policy.checker import check_metrics_against_policy
from telemetry_chain.segments.processor import SegmentProcessor
from telemetry_chain.simulation.generator import SensorDataGenerator


logger = logging.getLogger(__name__)


# =============================================================================
# Global State
# =============================================================================

# Streaming ingest; only touched from async handlers on the event loop
_processor: Optional[SegmentProcessor] = None
_startup_time: float = 0.0

# Error counters
_rejected_request_count: int = 0


def get_processor() -> SegmentProcessor:
    global _processor
    if _processor is None:
        _processor = SegmentProcessor(
            expected_count=settings.segment.duration_sec,
            log_every_n_segments=settings.segment.log_every_n_segments,
        )
    return _processor


# =============================================================================
# Lifespan Management
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    global _startup_time

    setup_logging(settings)
    _startup_time = time.time()
    logger.info(f"Starting {settings.service.name} {settings.service.version}")
    logger.info(
        f"Segment duration: {settings.segment.duration_sec}s, "
        f"policy: {settings.policy.model_dump(exclude_none=True)}"
    )

    get_processor()

    yield

    processor = get_processor()
    if processor.pending_count:
        logger.warning(
            f"Shutting down with {processor.pending_count} samples in an incomplete segment"
        )
    logger.info("Shutdown complete")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="telemetry-chain",
    description="Tamper-evident hash-chained telemetry segments",
    version=settings.service.version,
    lifespan=lifespan,
)


@app.exception_handler(SegmentChainError)
async def segment_chain_error_handler(request: Request, exc: SegmentChainError) -> JSONResponse:
    """Caller contract violations map to 400."""
    global _rejected_request_count
    _rejected_request_count += 1
    logger.warning(f"Rejected {request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(
        {"error": type(exc).__name__, "detail": str(exc)},
        status_code=400,
    )


# =============================================================================
# HTTP Endpoints
# =============================================================================

@app.get("/")
async def root() -> JSONResponse:
    """Service information endpoint."""
    return JSONResponse({
        "service": settings.service.name,
        "version": settings.service.version,
        "status": "running",
        "segment_duration_sec": settings.segment.duration_sec,
    })


@app.get("/health")
async def health() -> JSONResponse:
    """Liveness probe - always 200 while the process is running."""
    return JSONResponse({
        "status": "healthy",
        "uptime_seconds": round(time.time() - _startup_time, 1),
    })


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Detailed metrics for observability."""
    return JSONResponse({
        "uptime_seconds": round(time.time() - _startup_time, 1),
        "rejected_requests": _rejected_request_count,
        **get_processor().get_metrics(),
    })


@app.post("/segments", response_model=Segment)
async def create_segment(body: BuildSegmentRequest) -> JSONResponse:
    """Build a segment from exactly one segment's worth of samples."""
    expected = body.expected_count or settings.segment.duration_sec
    segment = build_segment(
        body.to_samples(),
        segment_start_time=body.segment_start_time,
        expected_count=expected,
    )
    return JSONResponse(segment.to_credential_subject())


@app.post("/segments/verify")
async def verify_segment_chain(body: VerifyChainRequest) -> JSONResponse:
    """Recompute the chain from raw samples and compare with the claim."""
    verified = verify_chain(body.to_samples(), body.hash_chain)
    return JSONResponse({"verified": verified})


@app.post("/segments/verify/full")
async def verify_full_segment(body: VerifySegmentRequest) -> JSONResponse:
    """Cross-check chain, sample count and aggregates."""
    result = verify_segment(body.to_samples(), body.segment)
    return JSONResponse(result.to_dict())


@app.post("/segments/simulate")
async def simulate_segment(body: SimulateRequest) -> JSONResponse:
    """Generate a synthetic batch and return it with its segment."""
    seed = body.seed if body.seed is not None else settings.simulation.seed
    generator = SensorDataGenerator(seed=seed)
    samples = generator.batch(
        start_time_ms=body.start_time,
        duration_sec=settings.segment.duration_sec,
        interval_ms=settings.segment.sample_interval_ms,
    )
    segment = build_segment(
        samples,
        segment_start_time=body.start_time,
        expected_count=settings.segment.duration_sec,
    )
    return JSONResponse({
        "samples": [sample.to_dict() for sample in samples],
        "segment": segment.to_credential_subject(),
    })


@app.post("/samples")
async def ingest_samples(body: IngestRequest) -> JSONResponse:
    """Feed samples to the streaming processor; return completed segments."""
    processor = get_processor()
    completed = []
    for sample in body.to_samples():
        segment = processor.update(sample)
        if segment is not None:
            completed.append(segment.to_credential_subject())

    return JSONResponse({
        "segments": completed,
        "pending_samples": processor.pending_count,
    })


@app.get("/segments/latest")
async def latest_segment() -> JSONResponse:
    """Most recently completed streamed segment."""
    segment = get_processor().last_segment
    if segment is None:
        return JSONResponse(
            {"error": "No segment completed yet"},
            status_code=503,
        )
    return JSONResponse(segment.to_credential_subject())


@app.post("/policy/check")
async def policy_check(body: PolicyCheckRequest) -> JSONResponse:
    """Check aggregated metrics against the given or configured policy."""
    policy = body.policy if body.policy is not None else settings.policy
    result = check_metrics_against_policy(body.aggregated_metrics, policy)
    return JSONResponse(result.to_dict())


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    # Cloud Run uses PORT env var
    port = int(os.environ.get("PORT", settings.server.port))

    uvicorn.run(
        "telemetry_chain.main:app",
        host=settings.server.host,
        port=port,
        reload=False,
    )
