"""
Goals API router.

Goals are stored; their progress is derived from carbon entries on every read.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.dependencies import get_current_user_id, get_db_session
from ecotrack.core.exceptions import NotFoundError
from ecotrack.database.repositories import GoalRepository
from ecotrack.database.schemas import GoalDBModel
from ecotrack.pydantic_models.goal import (
    GoalCreate,
    GoalCreateResponse,
    GoalListResponse,
    GoalProgressPydModel,
    GoalPydModel,
)
from ecotrack.services.trackers.goal_progress import GoalProgress, GoalProgressTracker
from ecotrack.utils.validators import sanitize_input

router = APIRouter(
    prefix="/api/goals",
    tags=["Goals"],
)

logger = logging.getLogger(__name__)


def _progress_model(progress: GoalProgress) -> GoalProgressPydModel:
    return GoalProgressPydModel(
        current_emissions=float(progress.current_emissions),
        percent=progress.percent,
        days_remaining=progress.days_remaining,
        is_overdue=progress.is_overdue,
    )


def _goal_model(goal: GoalDBModel, progress: GoalProgress) -> GoalPydModel:
    model = GoalPydModel.model_validate(goal)
    model.progress = _progress_model(progress)
    return model


@router.get("", response_model=GoalListResponse)
async def list_goals(
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """List the caller's goals, newest first, each with its current progress."""
    goals = await GoalRepository(session).get_for_user(user_id)
    tracker = GoalProgressTracker(session)

    return GoalListResponse(
        goals=[_goal_model(goal, await tracker.progress(goal, user_id)) for goal in goals]
    )


@router.post("", response_model=GoalCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_goal(
    payload: GoalCreate,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Create an emission goal.

    Example:
        ```
        POST /api/goals
        {"title": "Cut commute emissions", "target_emissions": 50, "deadline": "2025-12-31"}
        ```
    """
    goal = await GoalRepository(session).create(
        user_id=user_id,
        title=sanitize_input(payload.title),
        description=sanitize_input(payload.description),
        target_emissions=payload.target_emissions,
        deadline=payload.deadline,
    )
    await session.commit()
    logger.info(f"Created goal {goal.id} for user {user_id}")

    progress = await GoalProgressTracker(session).progress(goal, user_id)
    return GoalCreateResponse(goal=_goal_model(goal, progress))


@router.get("/{goal_id}/progress", response_model=GoalProgressPydModel)
async def get_goal_progress(
    goal_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db_session),
):
    """Progress of one of the caller's goals."""
    goal = await GoalRepository(session).get_owned(goal_id, user_id)
    if goal is None:
        raise NotFoundError(f"Goal {goal_id} not found")

    return _progress_model(await GoalProgressTracker(session).progress(goal, user_id))
