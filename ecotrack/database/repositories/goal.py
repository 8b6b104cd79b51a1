"""
Repository for Goal database operations.
"""
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.database.repositories.base import BaseRepository
from ecotrack.database.schemas import GoalDBModel


class GoalRepository(BaseRepository[GoalDBModel]):
    """Repository for emission goals."""

    def __init__(self, session: AsyncSession):
        super().__init__(GoalDBModel, session)

    async def get_for_user(self, user_id: UUID) -> List[GoalDBModel]:
        """Get a user's goals, newest first."""
        stmt = (
            select(GoalDBModel)
            .where(GoalDBModel.user_id == user_id)
            .order_by(GoalDBModel.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_owned(self, id: UUID, user_id: UUID) -> Optional[GoalDBModel]:
        """Get a goal only if it belongs to ``user_id``."""
        stmt = select(GoalDBModel).where(
            GoalDBModel.id == id, GoalDBModel.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
