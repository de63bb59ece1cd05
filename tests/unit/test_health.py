"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test health endpoint returns healthy status."""
    response = await client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data
    assert data["version"] == "0.1.0"
    assert data["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_api_root_returns_info(client: AsyncClient) -> None:
    """Test API root endpoint returns API info."""
    response = await client.get("/api/")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Book Search Benchmark API"
    assert data["version"] == "0.1.0"
    assert data["env"] == "test"


@pytest.mark.asyncio
async def test_v1_root(client: AsyncClient) -> None:
    """Test v1 API root endpoint."""
    response = await client.get("/v1/")

    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "1"
    assert data["status"] == "active"
