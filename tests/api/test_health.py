"""Tests for health check endpoints."""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "storefront-api"
    assert "version" in data


def test_readiness_check(client: TestClient, catalog_engine: AsyncEngine) -> None:
    """Test readiness endpoint returns ready status."""
    with patch("storefront.api.health.engine", catalog_engine):
        response = client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


def test_readiness_check_database_down(client: TestClient) -> None:
    """Test readiness endpoint reports an unreachable database."""
    broken = MagicMock()
    broken.connect.side_effect = RuntimeError("database is down")

    with patch("storefront.api.health.engine", broken):
        response = client.get("/ready")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unavailable"
    assert "database is down" in data["error"]
