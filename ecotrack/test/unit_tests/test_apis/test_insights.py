"""
API tests for AI insights and predictions.

The test config has no Gemini key, so the app serves the rule-based fallback
unless a fake model is injected into its insight service.
"""

import json
from datetime import timedelta
from types import SimpleNamespace

import pytest

from ecotrack.test.factory.activity import ActivityFactory, CarbonEntryFactory, FoodActivityFactory
from ecotrack.utils.datetime_utils import utc_now


class FakeModel:
    def __init__(self, payload):
        self.payload = payload

    async def generate_content_async(self, contents, **kwargs):
        return SimpleNamespace(text=json.dumps(self.payload))


@pytest.mark.asyncio
async def test_insights_fallback(test_async_client, auth_headers, test_user):
    for _ in range(3):
        await ActivityFactory(user_id=test_user.id)
    await FoodActivityFactory(user_id=test_user.id)
    # outside the 7 day timeframe
    await FoodActivityFactory(user_id=test_user.id, occurred_at=utc_now() - timedelta(days=20))

    response = await test_async_client.post(
        "/api/ai/insights", json={"timeframe": "7d"}, headers=auth_headers
    )
    assert response.status_code == 200

    data = response.json()
    assert data["source"] == "fallback"
    assert [i["title"] for i in data["insights"]] == [
        "Transport is Your Top Emitter",
        "Food Choices Matter",
        "Track Consistently for Better Insights",
    ]
    assert "Your 1 food-related activities" in data["insights"][1]["description"]


@pytest.mark.asyncio
async def test_insights_from_model(test_async_client, test_app, auth_headers):
    test_app.state.insight_service.model = FakeModel(
        {
            "insights": [
                {
                    "title": "Switch to Green Power",
                    "description": "Energy is half your footprint.",
                    "impact": "Medium",
                    "category": "energy",
                    "savingsPotential": "10 kg CO2e per month",
                    "actionSteps": ["Compare green tariffs"],
                }
            ]
        }
    )

    response = await test_async_client.post("/api/ai/insights", json={}, headers=auth_headers)
    assert response.status_code == 200

    data = response.json()
    assert data["source"] == "ai"
    assert data["insights"][0]["savings_potential"] == "10 kg CO2e per month"
    assert data["insights"][0]["action_steps"] == ["Compare green tariffs"]


@pytest.mark.asyncio
async def test_insights_reject_unknown_timeframe(test_async_client, auth_headers):
    response = await test_async_client.post(
        "/api/ai/insights", json={"timeframe": "1y"}, headers=auth_headers
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_insights_require_token(test_async_client):
    response = await test_async_client.post("/api/ai/insights", json={})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_predictions_fallback(test_async_client, auth_headers, test_user):
    await CarbonEntryFactory(user_id=test_user.id, emissions=12.5)

    response = await test_async_client.post(
        "/api/ai/predictions", json={"months": 3, "history_months": 4}, headers=auth_headers
    )
    assert response.status_code == 200

    data = response.json()
    assert data["source"] == "fallback"
    assert len(data["monthly_totals"]) == 4
    assert data["monthly_totals"][-1] == 12.5
    assert "rise" in data["prediction"]["prediction"]
    assert data["prediction"]["confidence"] == "Medium"


@pytest.mark.asyncio
async def test_predictions_reject_short_history(test_async_client, auth_headers):
    response = await test_async_client.post(
        "/api/ai/predictions", json={"history_months": 1}, headers=auth_headers
    )
    assert response.status_code == 422
