import pytest
from fastapi.testclient import TestClient

from app import app
from geotech.storage import MemoryStore

SPT_BODY = {"test_id": "BH1", "data": [{"depth": 3.0, "N1": 5, "N2": 7, "N3": 8}]}


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_compute_success_with_cors(client):
    response = client.post("/compute/spt", json=SPT_BODY)

    assert response.status_code == 200
    assert response.json()["status"] == "success"
    assert response.json()["computed_data"][0]["n_raw"] == 15
    assert response.headers["access-control-allow-origin"] == "*"


def test_preflight_returns_empty_body(client):
    response = client.options("/compute/spt")

    assert response.status_code == 200
    assert response.content == b""
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]
    assert "content-type" in response.headers["access-control-allow-headers"]


def test_validation_error_is_400(client):
    response = client.post("/compute/spt", json={"test_id": "BH1", "data": []})

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Data array is required and cannot be empty"}
    assert response.headers["access-control-allow-origin"] == "*"


def test_invalid_json_is_400(client):
    response = client.post("/compute/cpt", content=b"{not json", headers={"content-type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Request body must be valid JSON"}


def test_wrong_method_is_405(client):
    response = client.get("/compute/spt")

    assert response.status_code == 405
    assert response.json() == {"status": "error", "message": "Method not allowed"}


def test_unknown_kind_is_404(client):
    response = client.post("/compute/triaxial", json=SPT_BODY)

    assert response.status_code == 404
    assert response.json()["status"] == "error"
    assert "triaxial" in response.json()["message"]


def test_foundation_route(client):
    body = {
        "project_id": "F1",
        "parameters": {
            "foundationType": "shallow",
            "subType": "pad",
            "factorOfSafety": 3.0,
            "footingWidth": 2.0,
            "embedmentDepth": 1.0,
            "selectedLayers": [
                {"fromDepth": 0.0, "toDepth": 5.0, "soilType": "Sand", "unitWeight": 19.0, "frictionAngle": 30.0}
            ],
        },
    }
    response = client.post("/compute/foundation-shallow", json=body)

    assert response.status_code == 200
    assert response.json()["standard"] == "EUROCODE7"


def test_store_from_app_state(client, monkeypatch):
    store = MemoryStore()
    monkeypatch.setattr(app.state, "store", store)

    response = client.post("/compute/spt", json={**SPT_BODY, "store": True})

    assert response.status_code == 200
    assert [r["test_id"] for r in store.records] == ["BH1"]
