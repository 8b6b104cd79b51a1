"""
API tests for emission calculations and the emission factor table.
"""

import pytest

from ecotrack.database.repositories import ActivityRepository, CarbonEntryRepository


@pytest.mark.asyncio
async def test_public_calculation(test_async_client):
    response = await test_async_client.post(
        "/api/calculate/public",
        json={"category": "transport", "type": "car", "amount": 10},
    )
    assert response.status_code == 200

    data = response.json()
    assert data["emissions"] == 4.04
    assert data["unit"] == "kg CO2"
    assert data["category"] == "transport"
    assert data["type"] == "car"
    assert data["amount"] == 10


@pytest.mark.asyncio
async def test_public_calculation_stores_nothing(test_async_client, test_db_session):
    await test_async_client.post(
        "/api/calculate/public",
        json={"category": "food", "type": "beef", "amount": 2},
    )

    assert await ActivityRepository(test_db_session).count() == 0


@pytest.mark.asyncio
async def test_public_calculation_unknown_type(test_async_client):
    response = await test_async_client.post(
        "/api/calculate/public",
        json={"category": "energy", "type": "fusion", "amount": 100},
    )
    assert response.status_code == 200
    assert response.json()["emissions"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"category": "space", "type": "rocket", "amount": 1},
        {"category": "transport", "type": "car", "amount": 0},
        {"category": "transport", "type": "car", "amount": -5},
        {"category": "transport", "type": "car", "amount": "ten"},
        {"category": "transport", "type": "car"},
        {"category": "transport", "type": "", "amount": 1},
    ],
)
async def test_public_calculation_rejects_invalid_input(test_async_client, payload):
    response = await test_async_client.post("/api/calculate/public", json=payload)

    assert response.status_code == 422
    assert response.json()["message"] == "Validation error"


@pytest.mark.asyncio
async def test_record_activity(test_async_client, auth_headers, test_user, test_db_session):
    response = await test_async_client.post(
        "/api/calculate",
        headers=auth_headers,
        json={
            "category": "food",
            "type": "beef",
            "amount": 2,
            "description": "Dinner <party>",
            "date": "2025-11-24T18:30:00Z",
        },
    )
    assert response.status_code == 200

    data = response.json()
    assert data["emissions"] == 54.0
    assert data["activity"]["user_id"] == str(test_user.id)
    assert data["activity"]["unit"] == "kg"
    assert data["activity"]["description"] == "Dinner party"
    assert data["activity"]["occurred_at"] == "2025-11-24T18:30:00"
    assert data["carbon_entry"]["activity_id"] == data["activity"]["id"]
    assert data["carbon_entry"]["emissions"] == 54.0

    assert await ActivityRepository(test_db_session).count() == 1
    assert await CarbonEntryRepository(test_db_session).count() == 1


@pytest.mark.asyncio
async def test_record_activity_requires_token(test_async_client):
    response = await test_async_client.post(
        "/api/calculate",
        json={"category": "transport", "type": "car", "amount": 10},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_emission_factors(test_async_client):
    response = await test_async_client.get("/api/emission-factors")
    assert response.status_code == 200

    data = response.json()
    assert data["emission_factors"]["transport"]["car"] == 0.404
    assert data["emission_factors"]["food"]["beef"] == 27.0
    assert data["emission_factors"]["energy"]["electricity"] == 0.5
    assert data["units"] == {"transport": "miles", "food": "kg", "energy": "kWh"}
