"""
API tests for reduction tips.
"""

import pytest

from ecotrack.services.seed_database import DEFAULT_TIPS, DatabaseSeeder
from ecotrack.test.factory.goal import TipFactory


@pytest.mark.asyncio
async def test_list_tips_by_savings(test_async_client):
    await TipFactory(title="Small", savings=1.5)
    await TipFactory(title="Large", savings=9.0, category="food")
    await TipFactory(title="Medium", savings=4.0, category="transport")

    response = await test_async_client.get("/api/tips")
    assert response.status_code == 200

    tips = response.json()["tips"]
    assert [t["title"] for t in tips] == ["Large", "Medium", "Small"]


@pytest.mark.asyncio
async def test_list_tips_by_category(test_async_client, test_database):
    async with DatabaseSeeder(test_database) as seeder:
        await seeder.seed_tips()

    response = await test_async_client.get("/api/tips", params={"category": "transport"})
    assert response.status_code == 200

    tips = response.json()["tips"]
    assert [t["title"] for t in tips] == ["Bike to Work", "Use Public Transit"]
    assert tips[0]["savings"] == 15.2
    assert tips[0]["impact"] == "high"
    assert tips[0]["difficulty"] == "medium"
    assert len(DEFAULT_TIPS) == 6


@pytest.mark.asyncio
async def test_tips_do_not_require_a_token(test_async_client):
    response = await test_async_client.get("/api/tips")

    assert response.status_code == 200
    assert response.json()["tips"] == []
