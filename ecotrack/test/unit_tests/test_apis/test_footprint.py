"""
API tests for the footprint summary.
"""

from datetime import timedelta

import pytest

from ecotrack.test.factory.activity import CarbonEntryFactory
from ecotrack.utils.datetime_utils import utc_now


@pytest.mark.asyncio
async def test_footprint_summary_after_recording(test_async_client, auth_headers):
    for payload in (
        {"category": "transport", "type": "car", "amount": 10},
        {"category": "food", "type": "beef", "amount": 2},
        {"category": "energy", "type": "electricity", "amount": 10},
    ):
        response = await test_async_client.post(
            "/api/calculate", json=payload, headers=auth_headers
        )
        assert response.status_code == 200

    response = await test_async_client.get("/api/footprint/summary", headers=auth_headers)
    assert response.status_code == 200

    data = response.json()
    assert data["summary"] == {"transport": 4.04, "food": 54.0, "energy": 5.0}
    assert data["total"] == 63.04
    assert data["total_entries"] == 3
    assert len(data["recent_entries"]) == 3


@pytest.mark.asyncio
async def test_footprint_summary_empty(test_async_client, auth_headers):
    response = await test_async_client.get("/api/footprint/summary", headers=auth_headers)
    assert response.status_code == 200

    data = response.json()
    assert data["summary"] == {"transport": 0.0, "food": 0.0, "energy": 0.0}
    assert data["total"] == 0.0
    assert data["recent_entries"] == []


@pytest.mark.asyncio
async def test_footprint_summary_custom_window(test_async_client, auth_headers, test_user):
    now = utc_now()
    await CarbonEntryFactory(user_id=test_user.id, emissions=1.0, occurred_at=now - timedelta(days=60))
    await CarbonEntryFactory(user_id=test_user.id, emissions=2.0, occurred_at=now - timedelta(days=5))

    start = (now - timedelta(days=90)).isoformat()
    end = (now - timedelta(days=30)).isoformat()
    response = await test_async_client.get(
        "/api/footprint/summary", params={"start": start, "end": end}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["total"] == 1.0


@pytest.mark.asyncio
async def test_footprint_summary_inverted_window(test_async_client, auth_headers):
    now = utc_now()
    response = await test_async_client.get(
        "/api/footprint/summary",
        params={"start": now.isoformat(), "end": (now - timedelta(days=1)).isoformat()},
        headers=auth_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_footprint_summary_requires_token(test_async_client):
    response = await test_async_client.get("/api/footprint/summary")
    assert response.status_code == 401
