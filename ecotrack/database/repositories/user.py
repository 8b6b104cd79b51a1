"""
Repository for User database operations.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.database.repositories.base import BaseRepository
from ecotrack.database.schemas import UserDBModel


class UserRepository(BaseRepository[UserDBModel]):
    """Repository for user accounts."""

    def __init__(self, session: AsyncSession):
        super().__init__(UserDBModel, session)

    async def get_by_email(self, email: str) -> Optional[UserDBModel]:
        """
        Get user by email.

        Args:
            email: Lower-cased email address

        Returns:
            User if found, None otherwise
        """
        stmt = select(UserDBModel).where(UserDBModel.email == email)
        result = await self.session.execute(stmt)
        return result.scalars().first()
