"""
Tips API router.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.dependencies import get_db_session
from ecotrack.database.repositories import TipRepository
from ecotrack.pydantic_models.tip import TipListResponse, TipPydModel
from ecotrack.utils.constants import CategoryEnum

router = APIRouter(
    prefix="/api/tips",
    tags=["Tips"],
)


@router.get("", response_model=TipListResponse)
async def list_tips(
    category: Optional[CategoryEnum] = Query(None, description="Filter by category"),
    session: AsyncSession = Depends(get_db_session),
):
    """Reduction tips, largest estimated savings first."""
    tips = await TipRepository(session).list_by_savings(
        category=category.value if category else None
    )
    return TipListResponse(tips=[TipPydModel.model_validate(t) for t in tips])
