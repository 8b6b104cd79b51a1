"""
Activity Recorder.

Persists a logged activity together with the carbon entry derived from it.
The two rows are written in one transaction: either both exist or neither does.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.exceptions import StorageError
from ecotrack.database.repositories import ActivityRepository, CarbonEntryRepository
from ecotrack.database.schemas import ActivityDBModel, CarbonEntryDBModel
from ecotrack.services.calculators.emission_calculator import calculate_emissions
from ecotrack.utils.datetime_utils import to_naive_utc, utc_now
from ecotrack.utils.validators import sanitize_input

logger = logging.getLogger(__name__)


class ActivityRecorder:
    """
    Records, lists and deletes a user's activities.

    The recorder owns the transaction boundary for its writes and commits
    before returning.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.activity_repo = ActivityRepository(session)
        self.entry_repo = CarbonEntryRepository(session)

    async def record(
        self,
        user_id: UUID,
        category: str,
        activity_type: str,
        amount: float,
        description: Optional[str] = None,
        occurred_at: Optional[datetime] = None,
    ) -> tuple[ActivityDBModel, CarbonEntryDBModel]:
        """
        Calculate emissions for an activity and store it with its carbon entry.

        Args:
            user_id: Owner UUID (already authenticated)
            category: Activity category
            activity_type: Activity type within the category
            amount: Quantity in the category unit
            description: Optional free text, sanitized before storage
            occurred_at: When the activity happened; defaults to now

        Returns:
            Tuple of (activity, carbon entry)

        Raises:
            InputError: If amount is not a finite number
            StorageError: If either write fails; nothing is persisted
        """
        category = sanitize_input(category)
        activity_type = sanitize_input(activity_type)
        calculation = calculate_emissions(category, activity_type, amount)
        occurred_at = to_naive_utc(occurred_at) if occurred_at else utc_now()

        try:
            activity = await self.activity_repo.create(
                user_id=user_id,
                category=category,
                activity_type=activity_type,
                amount=amount,
                unit=calculation.unit,
                description=sanitize_input(description),
                occurred_at=occurred_at,
            )
            entry = await self.entry_repo.create(
                user_id=user_id,
                activity_id=activity.id,
                category=category,
                emissions=calculation.emissions,
                occurred_at=occurred_at,
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to record {category}/{activity_type} for user {user_id}: {e}")
            raise StorageError("Failed to record activity") from e

        logger.info(
            f"Recorded {category}/{activity_type} for user {user_id}: "
            f"{calculation.emissions} kg CO2e"
        )
        return activity, entry

    async def list_activities(
        self,
        user_id: UUID,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> list[ActivityDBModel]:
        """Page through a user's activities, newest first."""
        skip = (max(page, 1) - 1) * limit
        return await self.activity_repo.get_for_user(
            user_id, category=sanitize_input(category), skip=skip, limit=limit
        )

    async def delete(self, user_id: UUID, activity_id: UUID) -> bool:
        """
        Delete a user's activity and its carbon entry together.

        Returns:
            False if the activity does not exist or belongs to another user
        """
        activity = await self.activity_repo.get_owned(activity_id, user_id)
        if activity is None:
            return False

        try:
            await self.entry_repo.delete_for_activity(activity.id)
            await self.activity_repo.delete(activity.id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to delete activity {activity_id}: {e}")
            raise StorageError("Failed to delete activity") from e

        logger.info(f"Deleted activity {activity_id} for user {user_id}")
        return True
