"""Route tests for /api/v1/health — liveness, readiness, report and metrics."""

BASE = "/api/v1/health"


async def test_liveness(client):
    resp = await client.get(f"{BASE}/")
    assert resp.status_code == 200
    assert resp.json() == {
        "status": "healthy", "service": "document-matrix", "version": "0.1.0",
    }


async def test_alive_is_plain_text(client):
    resp = await client.get(f"{BASE}/alive")
    assert resp.status_code == 200
    assert resp.text == "OK"


async def test_ready(client):
    resp = await client.get(f"{BASE}/ready")
    assert resp.status_code == 200
    assert resp.json() == {
        "status": "ready", "checks": {"document_processing": "healthy"},
    }


async def test_ready_returns_503_when_self_check_fails(client, monkeypatch):
    from docmatrix.api.routes import health
    from docmatrix.infrastructure.health_checks import CheckResult

    monkeypatch.setattr(
        health, "check_document_processing",
        lambda: CheckResult("unhealthy", "boom"),
    )
    resp = await client.get(f"{BASE}/ready")
    assert resp.status_code == 503
    assert resp.json() == {"status": "not_ready", "reason": "boom"}


async def test_details_report(client):
    resp = await client.get(f"{BASE}/details")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] in ("healthy", "degraded")
    assert set(body["checks"]) == {
        "document_processing", "disk_space", "memory", "performance",
    }
    assert body["checks"]["document_processing"]["status"] == "healthy"


async def test_metrics_count_previous_requests(client):
    await client.get(f"{BASE}/alive")
    await client.get("/api/v1/documents/missing")
    resp = await client.get(f"{BASE}/metrics")
    body = resp.json()
    assert body["request_count"] == 2
    assert body["error_count"] == 1
    assert body["error_rate_percent"] == 50.0


async def test_prometheus_exposition(client):
    await client.get(f"{BASE}/alive")
    resp = await client.get(f"{BASE}/metrics/prometheus")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert "document_matrix_requests_total 1" in resp.text
    assert "# TYPE document_matrix_error_rate gauge" in resp.text
