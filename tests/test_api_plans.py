from fastapi.testclient import TestClient

from modgraph.api.main import app

client = TestClient(app)

MODULES = [
    {"name": "App", "public_dependencies": ["Core"]},
    {"name": "Core"},
]


def test_create_list_get_plan(tmp_path, monkeypatch):
    monkeypatch.setenv("MODGRAPH_WORKSPACE_ROOT", str(tmp_path))

    r = client.post("/api/v1/plans", json={"modules": MODULES})
    assert r.status_code == 200, r.text
    created = r.json()
    assert created["stage_count"] == 2
    assert created["path"].startswith(str(tmp_path))

    listed = client.get("/api/v1/plans").json()["plans"]
    assert [p["plan_id"] for p in listed] == [created["plan_id"]]

    got = client.get(f"/api/v1/plans/{created['plan_id']}")
    assert got.status_code == 200
    assert got.json()["stages"] == [["Core"], ["App"]]

    events = client.get("/api/v1/plans/events").json()["events"]
    assert events[-1]["event_type"] == "PlanCreated"
    assert events[-1]["plan_id"] == created["plan_id"]


def test_missing_plan_404(tmp_path, monkeypatch):
    monkeypatch.setenv("MODGRAPH_WORKSPACE_ROOT", str(tmp_path))
    r = client.get("/api/v1/plans/" + "0" * 64)
    assert r.status_code == 404


def test_invalid_modules_are_not_persisted(tmp_path, monkeypatch):
    monkeypatch.setenv("MODGRAPH_WORKSPACE_ROOT", str(tmp_path))
    r = client.post("/api/v1/plans", json={"modules": [{"name": "App", "public_dependencies": ["Gone"]}]})
    assert r.status_code == 422
    assert client.get("/api/v1/plans").json()["plans"] == []
