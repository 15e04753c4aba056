"""Unit tests for health endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from tourtrek.core.database import get_db


@pytest.mark.asyncio
async def test_root_liveness(test_client):
    response = await test_client.get("/")
    assert response.status_code == 200
    assert response.text == "Tour Package Server is running!"


@pytest.mark.asyncio
async def test_health_check(test_client):
    """Test the health check endpoint."""
    response = await test_client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert "environment" in data


@pytest.mark.asyncio
async def test_ready_check(test_app, test_client):
    """Test the readiness check when the database answers."""
    db = MagicMock()
    db.command = AsyncMock(return_value={"ok": 1.0})
    test_app.dependency_overrides[get_db] = lambda: db

    response = await test_client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["checks"]["database"] == "ok"
    db.command.assert_awaited_once_with("ping")


@pytest.mark.asyncio
async def test_ready_check_database_down(test_app, test_client):
    """Test the readiness check when the database is unreachable."""
    db = MagicMock()
    db.command = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
    test_app.dependency_overrides[get_db] = lambda: db

    response = await test_client.get("/ready")
    assert response.status_code == 503
    assert response.json()["checks"]["database"] == "error"
