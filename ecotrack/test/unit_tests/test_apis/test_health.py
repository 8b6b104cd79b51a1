"""
API tests for health checks and the general request rate limit.
"""

import pytest

from ecotrack.core.config import Config
from ecotrack.core.rate_limit import build_api_limiter


@pytest.mark.asyncio
async def test_health(test_async_client):
    response = await test_async_client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "OK"
    assert data["service"] == "ecotrack-api"
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_db_health(test_async_client):
    response = await test_async_client.get("/api/db-health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"


@pytest.mark.asyncio
async def test_general_rate_limit(test_async_client, test_app):
    limited = Config({"rate_limit": {"api_limit": "3 per 15 minutes", "storage_uri": "memory://"}})
    test_app.state.limiter = build_api_limiter(limited)

    statuses = [(await test_async_client.get("/api/health")).status_code for _ in range(4)]

    assert statuses == [200, 200, 200, 429]


@pytest.mark.asyncio
async def test_general_rate_limit_is_shared_across_routes(test_async_client, test_app):
    limited = Config({"rate_limit": {"api_limit": "3 per 15 minutes", "storage_uri": "memory://"}})
    test_app.state.limiter = build_api_limiter(limited)

    statuses = [
        (await test_async_client.get("/api/health")).status_code,
        (await test_async_client.get("/api/tips")).status_code,
        (await test_async_client.get("/api/health")).status_code,
        (await test_async_client.get("/api/tips")).status_code,
        (await test_async_client.get("/api/emission-factors")).status_code,
    ]

    assert statuses == [200, 200, 200, 429, 429]
