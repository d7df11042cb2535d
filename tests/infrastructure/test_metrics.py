"""Tests for RequestMetrics and the Prometheus exposition."""

from docmatrix.infrastructure.metrics import RequestMetrics, render_prometheus


def test_empty_snapshot_is_zero():
    snap = RequestMetrics().snapshot()
    assert snap.request_count == 0
    assert snap.average_response_ms == 0.0
    assert snap.error_rate_percent == 0.0


def test_record_counts_errors_from_400():
    metrics = RequestMetrics()
    metrics.record(10.0, 200)
    metrics.record(30.0, 404)
    metrics.record(20.0, 500)
    metrics.record(40.0, 399)
    snap = metrics.snapshot()
    assert snap.request_count == 4
    assert snap.error_count == 2
    assert snap.average_response_ms == 25.0
    assert snap.error_rate_percent == 50.0


def test_reset():
    metrics = RequestMetrics()
    metrics.record(5.0, 500)
    metrics.reset()
    assert metrics.snapshot().request_count == 0


def test_prometheus_lines():
    metrics = RequestMetrics()
    metrics.record(250.0, 200)
    text = render_prometheus(metrics.snapshot())
    assert "# TYPE document_matrix_requests_total counter" in text
    assert "document_matrix_requests_total 1\n" in text
    assert "document_matrix_response_time_seconds 0.25\n" in text
    assert "document_matrix_error_rate 0.0\n" in text
