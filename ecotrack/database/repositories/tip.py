"""
Repository for Tip database operations.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.database.repositories.base import BaseRepository
from ecotrack.database.schemas import TipDBModel


class TipRepository(BaseRepository[TipDBModel]):
    """Repository for reduction tips."""

    def __init__(self, session: AsyncSession):
        super().__init__(TipDBModel, session)

    async def list_by_savings(self, category: Optional[str] = None) -> List[TipDBModel]:
        """
        Get tips ordered by savings, largest first.

        Args:
            category: Optional category filter

        Returns:
            List of tips
        """
        stmt = select(TipDBModel)
        if category:
            stmt = stmt.where(TipDBModel.category == category)

        stmt = stmt.order_by(TipDBModel.savings.desc(), TipDBModel.title)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_title(self, category: str, title: str) -> Optional[TipDBModel]:
        """Get a tip by its natural key."""
        stmt = select(TipDBModel).where(
            TipDBModel.category == category, TipDBModel.title == title
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
