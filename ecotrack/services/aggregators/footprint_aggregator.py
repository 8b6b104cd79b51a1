"""
Footprint Aggregation Service.

Sums a user's carbon entries per category over a half-open time window
[window_start, window_end). Sums use Decimal so the total always equals the
sum of the per-category values exactly.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ecotrack.core.exceptions import InputError
from ecotrack.database.repositories import CarbonEntryRepository
from ecotrack.database.schemas import CarbonEntryDBModel
from ecotrack.utils.constants import (
    EMISSION_FACTORS,
    RECENT_ENTRIES_LIMIT,
    SUMMARY_WINDOW_DAYS,
)
from ecotrack.utils.datetime_utils import to_naive_utc, utc_now

logger = logging.getLogger(__name__)


@dataclass
class FootprintSummary:
    """Per-category and overall emissions for one window."""

    window_start: datetime
    window_end: datetime
    by_category: dict[str, Decimal]
    total: Decimal
    total_entries: int
    recent_entries: list[CarbonEntryDBModel] = field(default_factory=list)


def _to_decimal(value: float) -> Decimal:
    # str() keeps the stored 2-decimal value instead of its binary expansion
    return Decimal(str(value))


def summarize_entries(
    entries: Iterable[CarbonEntryDBModel],
    window_start: datetime,
    window_end: datetime,
    recent_limit: int = RECENT_ENTRIES_LIMIT,
) -> FootprintSummary:
    """
    Build a summary from entries already selected for the window.

    Args:
        entries: Carbon entries, sorted newest first
        window_start: Inclusive window start
        window_end: Exclusive window end
        recent_limit: How many of the newest entries to keep

    Returns:
        FootprintSummary; every known category is present, zero if unused
    """
    entries = list(entries)
    by_category: dict[str, Decimal] = {category: Decimal("0") for category in EMISSION_FACTORS}
    total = Decimal("0")

    for entry in entries:
        emissions = _to_decimal(entry.emissions)
        by_category[entry.category] = by_category.get(entry.category, Decimal("0")) + emissions
        total += emissions

    return FootprintSummary(
        window_start=window_start,
        window_end=window_end,
        by_category=by_category,
        total=total,
        total_entries=len(entries),
        recent_entries=entries[:recent_limit],
    )


class FootprintAggregator:
    """Computes footprint summaries on demand; nothing is persisted."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.entry_repo = CarbonEntryRepository(session)

    async def summarize(
        self,
        user_id: UUID,
        window_start: Optional[datetime] = None,
        window_end: Optional[datetime] = None,
    ) -> FootprintSummary:
        """
        Summarize a user's emissions in [window_start, window_end).

        Args:
            user_id: Owner UUID (already authenticated)
            window_start: Inclusive start; defaults to 30 days before window_end
            window_end: Exclusive end; defaults to now

        Raises:
            InputError: If window_start is after window_end
        """
        window_end = to_naive_utc(window_end) if window_end else utc_now()
        window_start = (
            to_naive_utc(window_start)
            if window_start
            else window_end - timedelta(days=SUMMARY_WINDOW_DAYS)
        )
        if window_start > window_end:
            raise InputError("Window start must be before window end")

        entries = await self.entry_repo.get_for_user_in_window(
            user_id, window_start, window_end
        )
        summary = summarize_entries(entries, window_start, window_end)

        logger.debug(
            f"Summarized {summary.total_entries} entries for user {user_id} "
            f"from {window_start} to {window_end}: {summary.total} kg CO2e"
        )
        return summary

    async def monthly_totals(
        self, user_id: UUID, months: int, now: Optional[datetime] = None
    ) -> list[Decimal]:
        """
        Total emissions per calendar month for the last ``months`` months, oldest first.

        The current (partial) month is the last element; months without entries are 0.

        Raises:
            InputError: If months is less than 1
        """
        if months < 1:
            raise InputError("At least one month is required")

        now = now or utc_now()
        month_starts = []
        year, month = now.year, now.month
        for _ in range(months):
            month_starts.append(datetime(year, month, 1))
            year, month = (year, month - 1) if month > 1 else (year - 1, 12)
        month_starts.reverse()

        entries = await self.entry_repo.get_for_user_in_window(
            user_id, month_starts[0], now + timedelta(microseconds=1)
        )
        totals = {start: Decimal("0") for start in month_starts}
        for entry in entries:
            key = datetime(entry.occurred_at.year, entry.occurred_at.month, 1)
            if key in totals:
                totals[key] += _to_decimal(entry.emissions)

        return [totals[start] for start in month_starts]
