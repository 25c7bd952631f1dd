import pytest
from fastapi.testclient import TestClient

from apsp.api import app


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("APSP_LOG_DIR", str(tmp_path))
    return TestClient(app)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert "X-Request-Id" in r.headers


def test_compute_sample(client):
    edges = [[0, 1, 10], [0, 3, 5], [1, 3, 2], [1, 2, 1], [2, 4, 4], [3, 1, 3], [3, 2, 9], [3, 4, 2], [4, 2, 6]]
    r = client.post("/api/compute", json={"num_vertices": 5, "edges": edges})
    assert r.status_code == 200
    body = r.json()
    assert body["dist"][0] == [0, 8, 9, 5, 7]
    assert body["dist"][1][0] is None
    assert body["next"][0][1] == 3
    assert body["has_negative_cycle"] is False

    status = client.get("/api/status").json()
    assert status["last_compute"]["num_vertices"] == 5


def test_compute_invalid_vertex(client):
    r = client.post("/api/compute", json={"num_vertices": 2, "edges": [[0, 3, 1]]})
    assert r.status_code == 400


def test_compute_unknown_policy(client):
    r = client.post("/api/compute", json={"num_vertices": 2, "edges": [], "policy": {"parallel_edges": "max"}})
    assert r.status_code == 400


def test_route(client):
    payload = {"num_vertices": 4, "edges": [[0, 1, -2], [1, 2, 3], [2, 3, -4], [0, 3, 1]], "waypoints": [0, 3]}
    r = client.post("/api/route", json=payload)
    assert r.status_code == 200
    assert r.json() == {"ok": True, "reason": "ok", "path": [0, 1, 2, 3], "cost": -3}


def test_route_negative_cycle(client):
    payload = {"num_vertices": 3, "edges": [[0, 1, -1], [1, 2, -2], [2, 0, -3]], "waypoints": [0, 2]}
    body = client.post("/api/route", json=payload).json()
    assert body["ok"] is False
    assert body["cost"] is None
    assert "negative cycle" in body["reason"]
