"""Health Checks — document self-test, disk space, memory and request performance.

Invariants:
    - Overall status is "healthy" only when every check is healthy, otherwise "degraded"
    - Check statuses: healthy | warning | critical | unhealthy
    - A failing check never raises out of run_health_checks(); it reports "unhealthy"
    - Disk: healthy < 85%, warning < 95%, critical otherwise
    - Memory: peak resident size against physical memory; healthy < 80%, warning < 95%
    - Performance: healthy when avg < 100ms and errors < 1%, warning when < 500ms and < 5%
"""

import logging
import os
import resource
import shutil
import sys
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from docmatrix.core.document import cell, horiz, vert
from docmatrix.core.effects import IDENTITY
from docmatrix.core.recursion_schemes import count_cells
from docmatrix.core.render import render_tree
from docmatrix.core.traversal import traverse_m
from docmatrix.core.validation import validate
from docmatrix.infrastructure.metrics import RequestMetrics

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()

_SELF_CHECK_DOC = vert(
    cell("health-check"),
    horiz(cell("test-1"), cell("test-2")),
)


@dataclass
class CheckResult:
    status: str
    message: str
    duration_ms: float = 0.0
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass
class HealthReport:
    status: str
    timestamp: str
    uptime_seconds: float
    version: str
    checks: dict[str, CheckResult]

    def to_dict(self) -> dict:
        return asdict(self)


def check_document_processing() -> CheckResult:
    """Run traversal, fold, render and validation on a fixed self-check document."""
    started = time.perf_counter()
    try:
        transformed = traverse_m(IDENTITY, str.upper, _SELF_CHECK_DOC)
        cells = count_cells(transformed)
        render_tree(transformed)
        valid = validate(transformed).is_ok
    except Exception as exc:
        logger.error(f"Document self-check raised: {exc}", exc_info=True)
        return CheckResult("unhealthy", f"Document processing failed: {exc}")
    duration = (time.perf_counter() - started) * 1000
    if cells != 3 or not valid:
        return CheckResult(
            "unhealthy", "Document processing returned unexpected results", duration,
        )
    return CheckResult(
        "healthy", "Document processing functional", duration,
        {"test_duration_ms": f"{duration:.3f}"},
    )


def classify_disk(usage_percent: float) -> str:
    if usage_percent < 85:
        return "healthy"
    if usage_percent < 95:
        return "warning"
    return "critical"


def check_disk_space(path: str = ".") -> CheckResult:
    try:
        usage = shutil.disk_usage(path)
    except OSError as exc:
        return CheckResult("unhealthy", f"Disk check failed: {exc}")
    percent = (usage.used / usage.total) * 100 if usage.total else 0.0
    return CheckResult(
        classify_disk(percent), f"Disk usage: {percent:.1f}%",
        metadata={
            "free_gb": str(usage.free // 1024 ** 3),
            "total_gb": str(usage.total // 1024 ** 3),
            "usage_percent": f"{percent:.1f}",
        },
    )


def classify_memory(usage_percent: float) -> str:
    if usage_percent < 80:
        return "healthy"
    if usage_percent < 95:
        return "warning"
    return "critical"


def _peak_rss_bytes() -> int:
    peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is bytes on macOS, kilobytes elsewhere
    return peak if sys.platform == "darwin" else peak * 1024


def check_memory() -> CheckResult:
    try:
        used = _peak_rss_bytes()
        total = os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")
    except (OSError, ValueError) as exc:
        return CheckResult("unhealthy", f"Memory check failed: {exc}")
    percent = (used / total) * 100 if total > 0 else 0.0
    return CheckResult(
        classify_memory(percent), f"Memory usage: {percent:.1f}%",
        metadata={
            "used_mb": str(used // 1024 ** 2),
            "max_mb": str(total // 1024 ** 2),
            "usage_percent": f"{percent:.1f}",
        },
    )


def classify_performance(average_ms: float, error_rate: float) -> str:
    if average_ms < 100 and error_rate < 1:
        return "healthy"
    if average_ms < 500 and error_rate < 5:
        return "warning"
    return "critical"


def check_performance(metrics: RequestMetrics) -> CheckResult:
    snap = metrics.snapshot()
    return CheckResult(
        classify_performance(snap.average_response_ms, snap.error_rate_percent),
        f"Avg response: {snap.average_response_ms:.1f}ms, "
        f"Error rate: {snap.error_rate_percent:.1f}%",
        metadata={
            "request_count": str(snap.request_count),
            "avg_response_ms": f"{snap.average_response_ms:.1f}",
            "error_rate_percent": f"{snap.error_rate_percent:.1f}",
        },
    )


def run_health_checks(
    metrics: RequestMetrics, version: str, disk_path: str = ".",
) -> HealthReport:
    checks = {
        "document_processing": check_document_processing(),
        "disk_space": check_disk_space(disk_path),
        "memory": check_memory(),
        "performance": check_performance(metrics),
    }
    overall = (
        "healthy" if all(c.status == "healthy" for c in checks.values())
        else "degraded"
    )
    if overall != "healthy":
        logger.warning(
            "Health checks degraded",
            extra={"context": {k: c.status for k, c in checks.items()}},
        )
    return HealthReport(
        status=overall,
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime_seconds=round(time.monotonic() - _STARTED_AT, 3),
        version=version,
        checks=checks,
    )
