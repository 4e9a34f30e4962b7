"""Tests for health check endpoint."""

from httpx import AsyncClient


async def test_health_endpoint(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "app" in data
    assert "env" in data


async def test_request_id_is_returned(client: AsyncClient):
    generated = await client.get("/health")
    propagated = await client.get("/health", headers={"X-Request-ID": "abc123"})

    assert len(generated.headers["x-request-id"]) == 32
    assert propagated.headers["x-request-id"] == "abc123"
