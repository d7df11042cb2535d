"""Tests for health checks — classification thresholds and the report."""

from docmatrix.infrastructure.health_checks import (
    check_disk_space, check_document_processing, check_memory, check_performance,
    classify_disk, classify_memory, classify_performance, run_health_checks,
)
from docmatrix.infrastructure.metrics import RequestMetrics


def test_document_processing_self_check_is_healthy():
    check = check_document_processing()
    assert check.status == "healthy"
    assert "test_duration_ms" in check.metadata


def test_classify_disk_thresholds():
    assert classify_disk(84.9) == "healthy"
    assert classify_disk(85) == "warning"
    assert classify_disk(94.9) == "warning"
    assert classify_disk(95) == "critical"


def test_classify_memory_thresholds():
    assert classify_memory(79.9) == "healthy"
    assert classify_memory(80) == "warning"
    assert classify_memory(94.9) == "warning"
    assert classify_memory(95) == "critical"


def test_memory_check_reports_used_and_max():
    check = check_memory()
    assert check.status in ("healthy", "warning", "critical")
    assert check.message.startswith("Memory usage: ")
    assert set(check.metadata) == {"used_mb", "max_mb", "usage_percent"}
    assert int(check.metadata["max_mb"]) > 0


def test_memory_check_failure_is_unhealthy(monkeypatch):
    import docmatrix.infrastructure.health_checks as health_checks

    def unavailable(name):
        raise ValueError(f"unrecognized configuration name: {name}")

    monkeypatch.setattr(health_checks.os, "sysconf", unavailable)
    check = check_memory()
    assert check.status == "unhealthy"
    assert "Memory check failed" in check.message


def test_classify_performance_thresholds():
    assert classify_performance(50, 0) == "healthy"
    assert classify_performance(150, 0) == "warning"
    assert classify_performance(50, 2) == "warning"
    assert classify_performance(600, 0) == "critical"
    assert classify_performance(50, 10) == "critical"


def test_disk_check_on_missing_path_is_unhealthy(tmp_path):
    check = check_disk_space(str(tmp_path / "does-not-exist"))
    assert check.status == "unhealthy"


def test_performance_check_reads_metrics():
    metrics = RequestMetrics()
    metrics.record(20.0, 200)
    check = check_performance(metrics)
    assert check.status == "healthy"
    assert check.metadata["request_count"] == "1"


def test_report_is_degraded_when_any_check_is_not_healthy():
    metrics = RequestMetrics()
    metrics.record(1000.0, 500)
    report = run_health_checks(metrics, "9.9.9")
    assert report.status == "degraded"
    assert report.version == "9.9.9"
    assert report.checks["performance"].status == "critical"
    assert "memory" in report.checks
    assert report.to_dict()["checks"]["document_processing"]["status"] == "healthy"
