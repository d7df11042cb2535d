"""Health & Metrics Endpoints — liveness, readiness, health report and request metrics.

Invariants:
    - GET /health/ and /health/alive always return 200 if the process is up (liveness)
    - GET /health/ready returns 503 when the document self-check fails (readiness)
    - GET /health/details returns the full report; status "healthy" or "degraded"
    - GET /health/metrics/prometheus returns text exposition format 0.0.4

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, PlainTextResponse

from docmatrix.config import get_settings
from docmatrix.infrastructure.health_checks import (
    check_document_processing, run_health_checks,
)
from docmatrix.infrastructure.metrics import render_prometheus, request_metrics

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.version,
    }


@router.get("/alive", response_class=PlainTextResponse)
async def alive():
    return "OK"


@router.get("/ready")
async def readiness_check():
    """Readiness check — runs the document self-check."""
    check = check_document_processing()
    if check.status != "healthy":
        logger.warning(f"Readiness failed: {check.message}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": check.message},
        )
    return {"status": "ready", "checks": {"document_processing": check.status}}


@router.get("/details")
async def health_details():
    report = run_health_checks(request_metrics, get_settings().version)
    return report.to_dict()


@router.get("/metrics")
async def metrics():
    return request_metrics.snapshot().to_dict()


@router.get("/metrics/prometheus")
async def metrics_prometheus():
    return PlainTextResponse(
        render_prometheus(request_metrics.snapshot()),
        media_type="text/plain; version=0.0.4",
    )
