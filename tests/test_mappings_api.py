from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.errors import AuthRequiredError
from app.services.factory import build_services
from app.stores.embedded_store import EmbeddedMappingStore
from conftest import make_mapping
from main import app


@pytest.fixture
def client(mixed_mappings):
    primary = EmbeddedMappingStore()
    primary.name = "mongo"
    services = build_services(Settings(), stores=[primary, EmbeddedMappingStore(seed=mixed_mappings)])
    # Primary tier rejects credentials on every call
    for method in ("find", "get_by_code", "insert_many", "clear", "stats"):
        setattr(primary, method, AsyncMock(side_effect=AuthRequiredError("bad credentials", backend="mongo")))
    app.state.services = services
    yield TestClient(app)
    del app.state.services


def test_search_returns_ranked_page(client):
    response = client.get("/api/v1/mappings/search", params={"q": "fever", "limit": "2"})

    assert response.status_code == 200
    body = response.json()
    assert [m["namaste_code"] for m in body["mappings"]] == ["UNA-002", "AYU-010"]
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["limit"] == 2
    assert body["totalPages"] == 2
    assert "X-Request-ID" in response.headers


def test_search_with_filters(client):
    response = client.get(
        "/api/v1/mappings/search",
        params={"category": "Siddha", "minConfidence": "0.9", "maxConfidence": "0.9"},
    )

    body = response.json()
    assert [m["namaste_code"] for m in body["mappings"]] == ["SID-001", "SID-002"]
    assert body["mappings"][0]["confidence_score"] == 0.9


def test_page_past_end_keeps_total(client):
    body = client.get("/api/v1/mappings/search", params={"page": "9"}).json()
    assert body["mappings"] == []
    assert body["total"] == 7


def test_invalid_search_input_is_400(client):
    response = client.get("/api/v1/mappings/search", params={"limit": "500"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "validation_error"
    assert body["details"]["field"] == "limit"
    assert body["request_id"] == response.headers["X-Request-ID"]


def test_unknown_category_is_400(client):
    response = client.get("/api/v1/mappings", params={"category": "Homeopathy"})
    assert response.status_code == 400
    assert response.json()["details"]["field"] == "category"


def test_list_mappings_by_chapter(client):
    body = client.get("/api/v1/mappings", params={"chapter": "Joint Disorders"}).json()
    assert [m["namaste_code"] for m in body["mappings"]] == ["UNA-002", "UNA-001"]


def test_get_mapping_and_not_found(client):
    response = client.get("/api/v1/mappings/SID-001")
    assert response.status_code == 200
    assert response.json()["namaste_term"] == "Pitham (Bile)"

    response = client.get("/api/v1/mappings/NOPE-1")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_insert_reports_partial_rejection(client):
    payload = [make_mapping("SID-001", 0.5, category="Siddha"), make_mapping("SID-050", 0.6, category="Siddha")]

    response = client.post("/api/v1/mappings", json=payload, headers={"X-User-Id": "admin"})

    assert response.status_code == 200
    body = response.json()
    assert body["insertedCount"] == 1
    assert body["insertedIds"] == ["SID-050"]
    assert body["rejected"][0]["code"] == "SID-001"
    assert client.get("/api/v1/mappings/SID-001").json()["confidence_score"] == 0.9


def test_insert_single_object(client):
    response = client.post("/api/v1/mappings", json=make_mapping("UNA-050", 0.8, category="Unani"))
    assert response.json()["insertedIds"] == ["UNA-050"]


def test_insert_rejects_out_of_range_confidence(client):
    response = client.post("/api/v1/mappings", json=make_mapping("UNA-051", 1.5, category="Unani"))
    assert response.status_code == 422


def test_clear(client):
    response = client.delete("/api/v1/mappings")
    assert response.json()["deletedCount"] == 7
    assert client.get("/api/v1/mappings/search").json()["total"] == 0


def test_stats_summary_and_metadata(client):
    body = client.get("/api/v1/mappings/stats/summary").json()
    assert body["totalMappings"] == 7
    assert body["categoriesCount"] == 3
    assert body["chaptersCount"] == 3
    assert body["categoryCounts"]["Ayurveda"] == 3

    assert client.get("/api/v1/mappings/metadata/categories").json() == ["Ayurveda", "Siddha", "Unani"]
    assert client.get("/api/v1/mappings/metadata/chapters").json() == [
        "Digestive Disorders",
        "Fever Disorders",
        "Joint Disorders",
    ]


def test_status_reports_active_backend_after_fallback(client):
    before = client.get("/api/v1/status").json()
    assert before["backend_state"] == "USING_PRIMARY"
    assert before["active_backend"] == "mongo"

    client.get("/api/v1/mappings/search", params={"q": "gout"})

    after = client.get("/api/v1/status").json()
    assert after["backend_state"] == "USING_SECONDARY"
    assert after["active_backend"] == "embedded"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
