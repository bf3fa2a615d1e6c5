"""
Tests for health check endpoints.
"""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)

HEALTHY_POOL = {
    "healthy": True,
    "service": "database_pool",
    "connection_time_ms": 1.2,
    "pool_stats": {
        "pool_size": 4,
        "pool_available": 3,
        "pool_utilization_percent": 25.0,
        "requests_waiting": 0,
    },
}


def test_healthz_endpoint():
    """Test the basic health check endpoint."""
    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"


def test_readyz_endpoint_database_healthy():
    """Test readiness endpoint when the database pool is healthy."""
    with patch("app.routes.health.db_health_check", AsyncMock(return_value=HEALTHY_POOL)):
        response = client.get("/readyz")

    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is True
    assert data["checks"]["database"]["ok"] is True
    assert data["checks"]["database"]["pool_stats"]["pool_size"] == 4
    assert isinstance(data["checks"]["database"]["latency_ms"], (int, float))


def test_readyz_endpoint_database_unhealthy():
    """Test readiness endpoint when the pool is not initialized."""
    unhealthy = {"healthy": False, "error": "Pool is new", "service": "database_pool"}
    with patch("app.routes.health.db_health_check", AsyncMock(return_value=unhealthy)):
        response = client.get("/readyz")

    # Should still return 200, but overall_ok should be False
    assert response.status_code == 200
    data = response.json()
    assert data["overall_ok"] is False
    assert data["checks"]["database"]["error"] == "Pool is new"


def test_readyz_endpoint_database_check_raises():
    with patch(
        "app.routes.health.db_health_check", AsyncMock(side_effect=RuntimeError("boom"))
    ):
        response = client.get("/readyz")

    data = response.json()
    assert data["overall_ok"] is False
    assert data["checks"]["database"]["error"] == "RuntimeError: boom"


def test_readyz_endpoint_missing_database_url():
    with (
        patch("app.routes.health.db_health_check", AsyncMock(return_value=HEALTHY_POOL)),
        patch("app.routes.health.settings.DATABASE_URL", ""),
    ):
        response = client.get("/readyz")

    data = response.json()
    assert data["overall_ok"] is False
    assert "DATABASE_URL not set" in data["checks"]["configuration"]["issues"]


def test_database_health_without_pool():
    """The pool is never opened in tests, so the detail endpoint reports it."""
    response = client.get("/health/database")

    assert response.status_code == 200
    assert response.json()["healthy"] is False


def test_request_id_is_echoed_or_generated():
    echoed = client.get("/healthz", headers={"X-Request-ID": "req-42"})
    generated = client.get("/healthz")

    assert echoed.headers["X-Request-ID"] == "req-42"
    assert generated.headers["X-Request-ID"]
