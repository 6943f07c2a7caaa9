"""
Tests for the ephemeris cache API.
"""

import pytest
from conftest import StubEphemerisProvider
from fastapi.testclient import TestClient

from ephemeris_cache.api.app import create_app

DATE = "2024-01-01T00:00:00Z"


@pytest.fixture
def provider():
    """Create the stub the app wraps."""
    return StubEphemerisProvider()


@pytest.fixture
def client(provider):
    """Create a test client with the lifespan running."""
    with TestClient(create_app(provider=provider)) as test_client:
        yield test_client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Ephemeris Cache API"
    assert len(data["bodies"]) == 8


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "provider": "stub-circular",
        "provider_healthy": True,
    }


def test_health_unavailable_provider(client, provider):
    provider.available = False

    response = client.get("/health")

    assert response.status_code == 503


def test_positions_for_selected_bodies(client):
    response = client.get("/positions", params={"date": DATE, "bodies": ["Earth", "Mars"]})

    assert response.status_code == 200
    data = response.json()
    assert set(data["positions"]) == {"Earth", "Mars"}
    assert len(data["positions"]["Earth"]) == 3
    assert data["missing"] == []


def test_positions_default_to_all_planets(client):
    response = client.get("/positions", params={"date": DATE})

    assert response.status_code == 200
    assert len(response.json()["positions"]) == 8


def test_positions_report_failed_bodies_as_missing(client, provider):
    provider.fail_bodies.add("Venus")

    response = client.get("/positions", params={"date": DATE, "bodies": ["Venus", "Earth"]})

    assert response.status_code == 200
    data = response.json()
    assert list(data["positions"]) == ["Earth"]
    assert data["missing"] == ["Venus"]


def test_positions_reject_unknown_body(client):
    response = client.get("/positions", params={"date": DATE, "bodies": ["Earth", "Pluto"]})

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["name"] == "InvalidInputError"
    assert detail["context"]["field"] == "body"


def test_body_details(client):
    response = client.get("/bodies/Earth", params={"date": DATE})

    assert response.status_code == 200
    data = response.json()
    assert data["body"] == "Earth"
    assert data["helio_vector"]["distance_au"] == pytest.approx(1.0)
    assert 28 < data["velocity_km_s"] < 32


def test_body_details_unknown_body(client):
    response = client.get("/bodies/Pluto", params={"date": DATE})

    assert response.status_code == 400


def test_body_details_calculation_failure(client, provider):
    provider.fail_bodies.add("Mars")

    response = client.get("/bodies/Mars", params={"date": DATE})

    assert response.status_code == 500


def test_time_jump_clears_and_returns_snapshot(client, provider):
    client.get("/positions", params={"date": DATE})
    provider.fail_bodies.add("Saturn")

    response = client.post("/time/jump", json={"date": "2150-06-01T00:00:00Z"})

    assert response.status_code == 200
    data = response.json()
    assert data["instant"].startswith("2150-06-01T00:00:00")
    states = {item["body"]: item for item in data["bodies"]}
    assert len(states) == 8
    assert states["Saturn"]["degraded"] is True
    assert states["Saturn"]["position"] == [0.0, 0.0, 0.0]
    assert states["Earth"]["degraded"] is False

    # Only the new instant's entries remain
    stats = client.get("/cache/stats").json()
    assert stats["position_cache_size"] == 7


def test_cache_stats_and_clear(client):
    client.get("/positions", params={"date": DATE, "bodies": ["Earth"]})
    client.get("/positions", params={"date": DATE, "bodies": ["Earth"]})

    stats = client.get("/cache/stats").json()
    assert stats["position_cache_size"] == 1
    assert stats["time_tolerance_ms"] > 0
    assert stats["metrics"]["position"]["hits"] == 1

    response = client.delete("/cache/clear")
    assert response.status_code == 200
    assert response.json()["success"] is True

    stats = client.get("/cache/stats").json()
    assert stats["vector_cache_size"] == 0
    assert stats["position_cache_size"] == 0
    assert stats["velocity_cache_size"] == 0


def test_ready(client, provider):
    """Readiness does not depend on the provider."""
    provider.available = False

    response = client.get("/ready")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store"
    assert response.json()["status"] == "ready"


def test_time_jump_rejects_date_outside_utc_range(client, provider):
    response = client.post("/time/jump", json={"date": "9999-12-31T23:00:00-05:00"})

    assert response.status_code == 400
    assert response.json()["detail"]["context"]["field"] == "instant"
    assert provider.calls == []
