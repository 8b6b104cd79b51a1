"""
Goal Progress Tracker.

Compares emissions since a goal was created against its target.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.database.schemas import GoalDBModel
from ecotrack.services.aggregators.footprint_aggregator import FootprintAggregator
from ecotrack.utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalProgress:
    """Derived progress of a goal at read time."""

    current_emissions: Decimal
    percent: int
    days_remaining: Optional[int]
    is_overdue: bool


def progress_percent(current_emissions: Decimal, target_emissions: Optional[float]) -> int:
    """
    Share of the target already emitted, rounded half up and clamped to 0..100.

    A zero or missing target yields 0.
    """
    if not target_emissions:
        return 0
    ratio = Decimal(current_emissions) / Decimal(str(target_emissions)) * 100
    percent = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(0, min(100, percent))


def days_until(deadline: Optional[Union[date, datetime]], now: datetime) -> Optional[int]:
    """Whole days from ``now`` until the deadline, rounded up; None without a deadline."""
    if deadline is None:
        return None
    if isinstance(deadline, datetime):
        return math.ceil((deadline - now).total_seconds() / 86400)
    return (deadline - now.date()).days


class GoalProgressTracker:
    """Derives goal progress from carbon entries in [goal.created_at, now)."""

    def __init__(self, session: AsyncSession):
        self.aggregator = FootprintAggregator(session)

    async def progress(
        self, goal: GoalDBModel, user_id: UUID, now: Optional[datetime] = None
    ) -> GoalProgress:
        now = now or utc_now()
        summary = await self.aggregator.summarize(
            user_id, window_start=min(goal.created_at, now), window_end=now
        )

        days_remaining = days_until(goal.deadline, now)
        result = GoalProgress(
            current_emissions=summary.total,
            percent=progress_percent(summary.total, goal.target_emissions),
            days_remaining=days_remaining,
            is_overdue=days_remaining is not None and days_remaining < 0,
        )
        logger.debug(f"Goal {goal.id} progress: {result}")
        return result
