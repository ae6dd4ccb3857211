"""
Tests for health check and metrics endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health check endpoint returns OK status."""
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["ledgerBackend"] == "memory"
    assert data["organizations"] == ["org1", "org2"]


@pytest.mark.asyncio
async def test_root_endpoint(client: AsyncClient):
    """Test root endpoint returns API info."""
    response = await client.get("/")

    assert response.status_code == 200
    data = response.json()
    assert "name" in data
    assert "version" in data
    assert "ledgerBackend" in data


@pytest.mark.asyncio
async def test_metrics_count_ledger_errors(client: AsyncClient):
    """Server errors are counted by kind."""
    await client.get("/asset/asset7", params={"orgName": "org9", "userName": "appUser"})

    response = await client.get("/metrics")

    assert response.status_code == 200
    data = response.json()
    assert data["errors_by_kind"]["credential_not_found"] >= 1
    assert data["total_requests"] >= 1


@pytest.mark.asyncio
async def test_metrics_prometheus(client: AsyncClient):
    """Prometheus exposition uses the text format."""
    await client.get("/health")

    response = await client.get("/metrics/prometheus")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "gateway_http_requests_total" in response.text


@pytest.mark.asyncio
async def test_asset_named_metrics_is_counted(client: AsyncClient):
    """Asset routes whose id is "metrics" are recorded under the asset route."""
    key = "GET /asset/{asset_id}"
    before = (await client.get("/metrics")).json()["requests_by_endpoint"].get(key, 0)

    await client.get("/asset/metrics", params={"orgName": "org1", "userName": "appUser"})

    after = (await client.get("/metrics")).json()
    assert after["requests_by_endpoint"][key] == before + 1
    assert "GET /metrics" not in after["requests_by_endpoint"]
