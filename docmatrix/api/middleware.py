"""Request Tracking Middleware — times every request into RequestMetrics.

Invariants:
    - Every response passing through is recorded exactly once
    - A request whose handler raised is recorded as a 500 and the exception re-raised
"""

import logging
import time

from fastapi import FastAPI, Request

from docmatrix.infrastructure.metrics import RequestMetrics

logger = logging.getLogger(__name__)


def register_request_tracking(app: FastAPI, metrics: RequestMetrics) -> None:

    @app.middleware("http")
    async def track_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            metrics.record((time.perf_counter() - started) * 1000, 500)
            raise
        duration_ms = (time.perf_counter() - started) * 1000
        metrics.record(duration_ms, response.status_code)
        logger.debug(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "method": request.method, "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 3),
            },
        )
        return response
