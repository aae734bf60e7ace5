from fastapi.testclient import TestClient

from gravsim.main import MAX_API_STEPS, app

client = TestClient(app)

PAIR = [
    {"name": "A", "mass": 1e24, "position": [1e9, 0, 0], "velocity": [0, 10, 0]},
    {"name": "B", "mass": 1e24, "position": [-1e9, 0, 0], "velocity": [0, -10, 0]},
]


def test_simulate_requested_bodies():
    resp = client.post(
        "/api/simulate",
        json={"timeStep": 60, "simulationLength": 180, "bodies": PAIR, "includeInitial": True},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["bodies"] == ["A", "B"]
    assert data["header"] == ["AX", "AY", "AZ", "BX", "BY", "BZ"]
    assert [s["t"] for s in data["samples"]] == [0.0, 60.0, 120.0, 180.0]
    assert data["meta"]["steps"] == 3
    assert data["meta"]["method"] == "euler_cromer"


def test_simulate_defaults_to_solar_system():
    resp = client.post("/api/simulate", json={"timeStep": 3600, "simulationLength": 3600})
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["bodies"]) == 11
    assert len(data["samples"]) == 1
    assert len(data["samples"][0]["positions"]) == 11


def test_simulate_rejects_long_runs():
    resp = client.post(
        "/api/simulate",
        json={"timeStep": 1, "simulationLength": MAX_API_STEPS + 1, "bodies": PAIR},
    )
    assert resp.status_code == 400


def test_simulate_rejects_bad_time_step():
    resp = client.post("/api/simulate", json={"timeStep": 0, "bodies": PAIR})
    assert resp.status_code == 400


def test_simulate_rejects_short_vectors():
    body = dict(PAIR[0], position=[1, 2])
    resp = client.post("/api/simulate", json={"bodies": [body]})
    assert resp.status_code == 422


def test_defaults_endpoint():
    resp = client.get("/api/defaults")
    assert resp.status_code == 200
    names = [body["name"] for body in resp.json()]
    assert names[0] == "The Sun"
    assert names[-1] == "Pluto"
    assert len(names) == 11


def test_simulate_rejects_massless_bodies():
    bodies = [dict(body, mass=0.0) for body in PAIR]
    resp = client.post(
        "/api/simulate", json={"timeStep": 60, "simulationLength": 60, "bodies": bodies}
    )
    assert resp.status_code == 400
    assert "total mass" in resp.json()["detail"]
