"""
Footprint API router.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.dependencies import get_current_user_id, get_db_session
from ecotrack.pydantic_models.activity import CarbonEntryPydModel
from ecotrack.pydantic_models.footprint import FootprintSummaryPydModel
from ecotrack.services.aggregators.footprint_aggregator import FootprintAggregator

router = APIRouter(
    prefix="/api/footprint",
    tags=["Footprint"],
)

logger = logging.getLogger(__name__)


@router.get("/summary", response_model=FootprintSummaryPydModel)
async def get_footprint_summary(
    start: Optional[datetime] = Query(None, description="Window start (inclusive); defaults to 30 days before end"),
    end: Optional[datetime] = Query(None, description="Window end (exclusive); defaults to now"),
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Emissions per category and in total over [start, end), plus the 10 newest entries.

    Example:
        ```
        GET /api/footprint/summary
        GET /api/footprint/summary?start=2025-11-01T00:00:00&end=2025-12-01T00:00:00
        ```
    """
    aggregator = FootprintAggregator(session)
    summary = await aggregator.summarize(user_id, window_start=start, window_end=end)

    return FootprintSummaryPydModel(
        summary={category: float(value) for category, value in summary.by_category.items()},
        total=float(summary.total),
        total_entries=summary.total_entries,
        recent_entries=[CarbonEntryPydModel.model_validate(e) for e in summary.recent_entries],
        window_start=summary.window_start,
        window_end=summary.window_end,
    )
