import requests

from prediction import manager as manager_module


def _refuse(*args, **kwargs):
    raise requests.ConnectionError("connection refused")


class FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    def json(self):
        return self._payload


# ── Water ─────────────────────────────────────────────────────────────────────

def test_submit_and_list_leak(client) -> None:
    resp = client.post("/api/water/leaks", json={"location": "Main St", "description": "pipe burst"})

    assert resp.status_code == 201
    created = resp.json()
    assert created["status"] == "pending"
    assert created["id"]
    assert created["createdAt"] == created["updatedAt"]

    listed = client.get("/api/water/leaks").json()
    assert [(r["id"], r["location"], r["description"]) for r in listed] == [
        (created["id"], "Main St", "pipe burst"),
    ]


def test_submit_leak_defaults_missing_fields(client) -> None:
    resp = client.post("/api/water/leaks", json={})

    assert resp.status_code == 201
    assert resp.json()["location"] == ""
    assert resp.json()["description"] == ""


def test_submit_leak_store_failure_is_500(client, leak_store, monkeypatch) -> None:
    monkeypatch.setattr(leak_store, "append_report", lambda report: False)

    resp = client.post("/api/water/leaks", json={"location": "x", "description": "y"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to save complaint"}


def test_water_mock_endpoints(client) -> None:
    quality = client.get("/api/water/quality").json()
    assert len(quality) == 1
    assert 6.5 <= quality[0]["ph"] <= 8.5

    trends = client.get("/api/water/quality/trends").json()
    assert len(trends) == 24

    stats = client.get("/api/water/stats").json()
    assert set(stats) == {"qualityReports", "leaksFixed", "villagesCovered"}

    guides = client.get("/api/water/purification-guides").json()
    assert [g["title"] for g in guides] == ["Boiling Water", "Chlorination", "Solar Disinfection"]


# ── Farmer ────────────────────────────────────────────────────────────────────

def test_farmer_endpoints_serve_snapshot(client) -> None:
    assert len(client.get("/api/farmer/market-prices").json()) == 5
    assert len(client.get("/api/farmer/weather-alerts").json()) == 3
    trends = client.get("/api/farmer/market-trends").json()
    assert [t["cropName"] for t in trends] == ["Wheat", "Rice", "Pulses"]
    assert client.get("/api/farmer/stats").json()["marketUpdates"] == "Daily"


def test_crop_recommendations_use_soil_type(client) -> None:
    recs = client.get("/api/farmer/crop-recommendations", params={"soilType": "Red Soil"}).json()

    assert len(recs) == 3
    assert all(r["soilType"] == ["Red Soil"] for r in recs)


def test_soil_sample_upload(client) -> None:
    resp = client.post(
        "/api/farmer/soil-analysis",
        files={"sample": ("sample.jpg", b"\xff\xd8\xff", "image/jpeg")},
    )

    assert resp.status_code == 201
    assert resp.json()["status"] == "submitted"


# ── Health ────────────────────────────────────────────────────────────────────

def test_facilities_malformed_coordinates(client) -> None:
    resp = client.get("/api/health/facilities", params={"lat": "abc", "lng": "20"})

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Failed to search for healthcare facilities"
    assert "Invalid coordinates format" in body["details"]


def test_facilities_near_known_city(client) -> None:
    facilities = client.get("/api/health/facilities", params={"location": "Delhi"}).json()

    assert 5 <= len(facilities) <= 15
    for f in facilities:
        assert abs(f["coordinates"]["lat"] - 28.6139) <= 0.05
        assert f["address"].endswith("Delhi")


def test_symptom_check_requires_array(client) -> None:
    resp = client.post("/api/health/symptom-check", json={"symptoms": "fever"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Symptoms must be an array"}


def test_symptom_check(client) -> None:
    resp = client.post("/api/health/symptom-check", json={"symptoms": ["fever", "cough"]})

    assert resp.status_code == 200
    body = resp.json()
    assert 1 <= len(body["possibleConditions"]) <= 3
    assert body["severity"] in {"low", "medium", "high"}


def test_health_stats_and_advisories(client) -> None:
    assert set(client.get("/api/health/stats").json()) == {"healthChecks", "medicalCamps"}
    assert len(client.get("/api/health/advisories").json()) <= 3


# ── Prediction ────────────────────────────────────────────────────────────────

def test_predict_when_service_absent(client, monkeypatch) -> None:
    monkeypatch.setattr(manager_module.requests, "get", _refuse)

    resp = client.post("/api/health/predict", json={})

    assert resp.status_code == 503
    assert resp.json() == {"error": "Prediction service is not ready"}


def test_prediction_status_not_ready(client, monkeypatch) -> None:
    monkeypatch.setattr(manager_module.requests, "get", _refuse)

    assert client.get("/api/health/prediction-status").json() == {"status": "not_ready"}


def test_predict_proxies_result(client, monkeypatch) -> None:
    monkeypatch.setattr(manager_module.requests, "get", lambda *a, **k: FakeResponse({"status": "ok"}))
    monkeypatch.setattr(manager_module.requests, "post", lambda *a, **k: FakeResponse({"risks": []}))

    resp = client.post("/api/health/predict", json={"age": 30})

    assert resp.status_code == 200
    assert resp.json() == {"risks": []}


def test_predict_upstream_error_is_500(client, monkeypatch) -> None:
    monkeypatch.setattr(manager_module.requests, "get", lambda *a, **k: FakeResponse({"status": "ok"}))
    monkeypatch.setattr(manager_module.requests, "post", lambda *a, **k: FakeResponse({"error": "model missing"}))

    resp = client.post("/api/health/predict", json={"age": 30})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to get prediction results", "details": "model missing"}


def test_start_server_reports_failed_step(client, monkeypatch) -> None:
    def no_python(args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", args[0])

    monkeypatch.setattr(manager_module.requests, "get", _refuse)
    monkeypatch.setattr(manager_module.subprocess, "run", no_python)

    resp = client.get("/api/start-prediction-server")

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Python is not installed or not accessible"
    assert body["step"] == "runtime"

    state = client.get("/api/prediction-server/state").json()
    assert state["state"] == "failed"
    assert state["last_error"] == "Python is not installed or not accessible"


def test_start_server_already_running(client, monkeypatch) -> None:
    monkeypatch.setattr(manager_module.requests, "get", lambda *a, **k: FakeResponse({"status": "ok"}))

    resp = client.get("/api/start-prediction-server")

    assert resp.status_code == 200
    assert resp.json() == {"message": "Prediction server is already running", "state": "ready"}


# ── Service ───────────────────────────────────────────────────────────────────

def test_root_and_health(client) -> None:
    assert client.get("/health").json()["status"] == "ok"
    assert client.get("/").json()["websocket"] == "/ws"


def test_invalid_body_uses_error_shape(client) -> None:
    resp = client.post("/api/water/leaks", json=["not", "an", "object"])

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request body"


def test_submit_leak_null_and_non_string_fields_are_loose(client) -> None:
    resp = client.post("/api/water/leaks", json={"location": None, "description": 42})

    assert resp.status_code == 201
    assert resp.json()["location"] == ""
    assert resp.json()["description"] == "42"


def test_submit_leak_with_lone_surrogate(client) -> None:
    resp = client.post(
        "/api/water/leaks",
        content=b'{"location": "\\ud800", "description": "d"}',
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 201
    assert resp.json()["location"] == "?"
    assert [r["location"] for r in client.get("/api/water/leaks").json()] == ["?"]


def test_symptom_check_array_body(client) -> None:
    resp = client.post("/api/health/symptom-check", json=["fever"])

    assert resp.status_code == 400
    assert resp.json() == {"error": "Symptoms must be an array"}
