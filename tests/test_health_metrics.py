from fastapi.testclient import TestClient

from modgraph.api.main import app

client = TestClient(app)


def test_liveness_and_readiness():
    assert client.get("/api/v1/health/live").json() == {"status": "alive"}
    r = client.get("/api/v1/health/ready")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"


def test_readiness_fails_when_workspace_unwritable(tmp_path, monkeypatch):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    monkeypatch.setenv("MODGRAPH_WORKSPACE_ROOT", str(blocker))

    r = client.get("/api/v1/health/ready")
    assert r.status_code == 503
    assert r.json()["status"] == "not_ready"


def test_request_id_is_echoed():
    r = client.get("/api/v1/health/live", headers={"X-Request-Id": "rid-123"})
    assert r.headers["X-Request-Id"] == "rid-123"
    assert client.get("/api/v1/health/live").headers["X-Request-Id"]


def test_metrics_snapshot_counts_requests():
    client.get("/api/v1/health/live")
    client.post("/api/v1/resolve", json={"modules": [{"name": "A"}]})

    body = client.get("/api/v1/metrics/snapshot").json()
    assert body["requests_total"] >= 2
    assert body["health_live"] == 1
    assert body["resolutions_ok"] == 1


def test_prometheus_export():
    client.post("/api/v1/resolve", json={"modules": [{"name": "A"}]})
    r = client.get("/metrics")
    assert r.status_code == 200
    assert "modgraph_http_requests_total" in r.text
    assert "modgraph_resolutions_total" in r.text


def test_unknown_route_does_not_leak_traceback():
    r = client.get("/api/v1/does/not/exist")
    assert r.status_code == 404
    assert "Traceback" not in r.text


def test_openapi_lists_resolution_routes():
    paths = client.get("/openapi.json").json()["paths"]
    for p in ("/api/v1/resolve", "/api/v1/validate", "/api/v1/graph", "/api/v1/dependents", "/api/v1/plans"):
        assert p in paths
