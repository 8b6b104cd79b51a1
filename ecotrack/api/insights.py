"""
AI Insights API router.

Both endpoints always answer 200: provider failures are replaced by the
rule-based fallback and flagged with ``source: "fallback"``.
"""

import logging
from datetime import timedelta
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.dependencies import (
    get_current_user_id,
    get_db_session,
    get_insight_service,
)
from ecotrack.database.repositories import ActivityRepository
from ecotrack.pydantic_models.insight import (
    InsightRequest,
    InsightResponse,
    PredictionRequest,
    PredictionResponse,
)
from ecotrack.services.aggregators.footprint_aggregator import FootprintAggregator
from ecotrack.services.insights.insight_service import InsightService
from ecotrack.utils.datetime_utils import utc_now

router = APIRouter(
    prefix="/api/ai",
    tags=["AI Insights"],
)

logger = logging.getLogger(__name__)


@router.post("/insights", response_model=InsightResponse)
async def generate_insights(
    request: InsightRequest,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
    insight_service: InsightService = Depends(get_insight_service),
):
    """
    Personalised reduction insights from the caller's recent activities.

    Example:
        ```
        POST /api/ai/insights
        {"timeframe": "30d"}
        ```
    """
    since = utc_now() - timedelta(days=request.timeframe.days)
    activities = await ActivityRepository(session).get_for_user_since(
        user_id, since, limit=insight_service.max_activities
    )
    activity_data = [
        {
            "category": a.category,
            "type": a.activity_type,
            "amount": a.amount,
            "unit": a.unit,
            "description": a.description,
            "date": a.occurred_at.isoformat(),
        }
        for a in activities
    ]

    logger.info(f"Generating insights for user {user_id} from {len(activity_data)} activities")
    report = await insight_service.generate_insights(activity_data)
    return InsightResponse(insights=report.insights, source=report.source)


@router.post("/predictions", response_model=PredictionResponse)
async def predict_emissions(
    request: PredictionRequest,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
    insight_service: InsightService = Depends(get_insight_service),
):
    """Predict the caller's emission trend from their monthly totals."""
    totals = await FootprintAggregator(session).monthly_totals(user_id, request.history_months)
    monthly_totals = [float(total) for total in totals]

    report = await insight_service.predict_emissions(monthly_totals, months=request.months)
    return PredictionResponse(
        prediction=report.prediction,
        monthly_totals=monthly_totals,
        source=report.source,
    )
