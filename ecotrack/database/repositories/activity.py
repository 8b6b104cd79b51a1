"""
Repositories for Activity and CarbonEntry database operations.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.database.repositories.base import BaseRepository
from ecotrack.database.schemas import ActivityDBModel, CarbonEntryDBModel


class ActivityRepository(BaseRepository[ActivityDBModel]):
    """Repository for logged activities."""

    def __init__(self, session: AsyncSession):
        super().__init__(ActivityDBModel, session)

    async def get_for_user(
        self,
        user_id: UUID,
        category: Optional[str] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> List[ActivityDBModel]:
        """
        Get a user's activities, newest first.

        Args:
            user_id: Owner UUID
            category: Optional category filter
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of activities
        """
        stmt = select(ActivityDBModel).where(ActivityDBModel.user_id == user_id)
        if category:
            stmt = stmt.where(ActivityDBModel.category == category)

        stmt = (
            stmt.order_by(ActivityDBModel.occurred_at.desc(), ActivityDBModel.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_user_since(
        self, user_id: UUID, since: datetime, limit: int
    ) -> List[ActivityDBModel]:
        """Get a user's most recent activities that occurred on or after ``since``."""
        stmt = (
            select(ActivityDBModel)
            .where(
                ActivityDBModel.user_id == user_id,
                ActivityDBModel.occurred_at >= since,
            )
            .order_by(ActivityDBModel.occurred_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_owned(self, id: UUID, user_id: UUID) -> Optional[ActivityDBModel]:
        """Get an activity only if it belongs to ``user_id``."""
        stmt = select(ActivityDBModel).where(
            ActivityDBModel.id == id, ActivityDBModel.user_id == user_id
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()


class CarbonEntryRepository(BaseRepository[CarbonEntryDBModel]):
    """Repository for derived carbon entries."""

    def __init__(self, session: AsyncSession):
        super().__init__(CarbonEntryDBModel, session)

    async def get_for_user_in_window(
        self, user_id: UUID, window_start: datetime, window_end: datetime
    ) -> List[CarbonEntryDBModel]:
        """
        Get a user's entries with ``window_start <= occurred_at < window_end``.

        Returns:
            Entries sorted by occurred_at, newest first
        """
        stmt = (
            select(CarbonEntryDBModel)
            .where(
                CarbonEntryDBModel.user_id == user_id,
                CarbonEntryDBModel.occurred_at >= window_start,
                CarbonEntryDBModel.occurred_at < window_end,
            )
            .order_by(
                CarbonEntryDBModel.occurred_at.desc(),
                CarbonEntryDBModel.created_at.desc(),
            )
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_for_activity(self, activity_id: UUID) -> int:
        """Delete the entry derived from an activity."""
        stmt = delete(CarbonEntryDBModel).where(
            CarbonEntryDBModel.activity_id == activity_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
