"""
Emissions Calculations API router.

Public calculation (nothing stored) and authenticated activity recording.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.dependencies import get_current_user_id, get_db_session
from ecotrack.pydantic_models.activity import ActivityPydModel, CarbonEntryPydModel
from ecotrack.pydantic_models.calculation import (
    EmissionCalculationRequest,
    PublicCalculationResponse,
    RecordActivityRequest,
    RecordActivityResponse,
)
from ecotrack.services.calculators.emission_calculator import calculate_emissions
from ecotrack.services.recorders.activity_recorder import ActivityRecorder
from ecotrack.utils.constants import PUBLIC_EMISSIONS_UNIT
from ecotrack.utils.validators import sanitize_input

router = APIRouter(
    prefix="/api",
    tags=["Calculations"],
)

logger = logging.getLogger(__name__)


@router.post("/calculate/public", response_model=PublicCalculationResponse)
async def calculate_public(request: EmissionCalculationRequest):
    """
    Calculate emissions without an account. Nothing is stored.

    Example:
        ```
        POST /api/calculate/public
        {"category": "transport", "type": "car", "amount": 10}
        ```
    """
    activity_type = sanitize_input(request.type)
    calculation = calculate_emissions(request.category.value, activity_type, request.amount)

    return PublicCalculationResponse(
        emissions=calculation.emissions,
        unit=PUBLIC_EMISSIONS_UNIT,
        category=request.category,
        type=activity_type,
        amount=request.amount,
    )


@router.post("/calculate", response_model=RecordActivityResponse)
async def record_activity(
    request: RecordActivityRequest,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Calculate emissions for an activity and store it with its carbon entry.

    Example:
        ```
        POST /api/calculate
        {"category": "food", "type": "beef", "amount": 2, "description": "Dinner"}
        ```
    """
    recorder = ActivityRecorder(session)
    activity, entry = await recorder.record(
        user_id=user_id,
        category=request.category.value,
        activity_type=request.type,
        amount=request.amount,
        description=request.description,
        occurred_at=request.date,
    )

    return RecordActivityResponse(
        emissions=entry.emissions,
        activity=ActivityPydModel.model_validate(activity),
        carbon_entry=CarbonEntryPydModel.model_validate(entry),
    )
