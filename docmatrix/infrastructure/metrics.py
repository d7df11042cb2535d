"""Request Metrics — process-wide request counters for /metrics endpoints.

Invariants:
    - Counters only grow; reset() exists for tests
    - A response with status >= 400 counts as an error
    - All reads and writes go through one lock (uvicorn may run handlers in threads)
"""

import threading
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class MetricsSnapshot:
    request_count: int
    average_response_ms: float
    error_rate_percent: float
    error_count: int

    def to_dict(self) -> dict:
        return asdict(self)


class RequestMetrics:
    """Thread-safe request counter."""

    def __init__(self):
        self._lock = threading.Lock()
        self._requests = 0
        self._errors = 0
        self._total_ms = 0.0

    def record(self, duration_ms: float, status_code: int) -> None:
        with self._lock:
            self._requests += 1
            self._total_ms += duration_ms
            if status_code >= 400:
                self._errors += 1

    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            requests, errors, total = self._requests, self._errors, self._total_ms
        return MetricsSnapshot(
            request_count=requests,
            average_response_ms=total / requests if requests else 0.0,
            error_rate_percent=(errors / requests) * 100 if requests else 0.0,
            error_count=errors,
        )

    def reset(self) -> None:
        with self._lock:
            self._requests = 0
            self._errors = 0
            self._total_ms = 0.0


def render_prometheus(snapshot: MetricsSnapshot) -> str:
    """Prometheus text exposition format (version 0.0.4)."""
    return (
        "# HELP document_matrix_requests_total Total number of requests\n"
        "# TYPE document_matrix_requests_total counter\n"
        f"document_matrix_requests_total {snapshot.request_count}\n"
        "\n"
        "# HELP document_matrix_response_time_seconds Average response time in seconds\n"
        "# TYPE document_matrix_response_time_seconds gauge\n"
        f"document_matrix_response_time_seconds {snapshot.average_response_ms / 1000.0}\n"
        "\n"
        "# HELP document_matrix_error_rate Error rate percentage\n"
        "# TYPE document_matrix_error_rate gauge\n"
        f"document_matrix_error_rate {snapshot.error_rate_percent}\n"
    )


request_metrics = RequestMetrics()
