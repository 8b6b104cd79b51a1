"""
Activities API router.

List and delete the caller's logged activities.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.dependencies import get_current_user_id, get_db_session
from ecotrack.core.exceptions import NotFoundError
from ecotrack.pydantic_models.activity import ActivityListResponse, ActivityPydModel
from ecotrack.services.recorders.activity_recorder import ActivityRecorder
from ecotrack.utils.constants import CategoryEnum

router = APIRouter(
    prefix="/api/activities",
    tags=["Activities"],
)

logger = logging.getLogger(__name__)


@router.get("", response_model=ActivityListResponse)
async def list_activities(
    category: Optional[CategoryEnum] = Query(None, description="Filter by category"),
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(20, ge=1, le=100, description="Activities per page"),
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """
    List the caller's activities, newest first.

    Example:
        ```
        GET /api/activities?category=transport&page=2&limit=10
        ```
    """
    recorder = ActivityRecorder(session)
    activities = await recorder.list_activities(
        user_id,
        category=category.value if category else None,
        page=page,
        limit=limit,
    )
    return ActivityListResponse(
        activities=[ActivityPydModel.model_validate(a) for a in activities],
        page=page,
        limit=limit,
    )


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(
    activity_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Delete one of the caller's activities together with its carbon entry."""
    recorder = ActivityRecorder(session)
    if not await recorder.delete(user_id, activity_id):
        raise NotFoundError(f"Activity {activity_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
