"""
Service tests for the footprint aggregator.
"""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from ecotrack.core.exceptions import InputError
from ecotrack.services.aggregators.footprint_aggregator import FootprintAggregator
from ecotrack.test.factory.activity import CarbonEntryFactory
from ecotrack.test.factory.user import UserFactory
from ecotrack.utils.datetime_utils import utc_now

WINDOW_START = datetime(2025, 11, 1)
WINDOW_END = datetime(2025, 12, 1)


@pytest.mark.asyncio
async def test_summary_totals_match_category_sums(test_db_session, test_user):
    values = [
        ("transport", 0.1),
        ("transport", 0.2),
        ("food", 54.0),
        ("food", 13.33),
        ("energy", 0.07),
    ]
    for day, (category, emissions) in enumerate(values, start=1):
        await CarbonEntryFactory(
            user_id=test_user.id,
            category=category,
            emissions=emissions,
            occurred_at=datetime(2025, 11, day, 9, 0),
        )

    summary = await FootprintAggregator(test_db_session).summarize(
        test_user.id, WINDOW_START, WINDOW_END
    )

    assert summary.by_category == {
        "transport": Decimal("0.3"),
        "food": Decimal("67.33"),
        "energy": Decimal("0.07"),
    }
    assert summary.total == sum(summary.by_category.values())
    assert summary.total == Decimal("67.70")
    assert summary.total_entries == 5


@pytest.mark.asyncio
async def test_summary_window_is_half_open(test_db_session, test_user):
    await CarbonEntryFactory(user_id=test_user.id, emissions=1.0, occurred_at=WINDOW_START)
    await CarbonEntryFactory(user_id=test_user.id, emissions=2.0, occurred_at=WINDOW_END)
    await CarbonEntryFactory(
        user_id=test_user.id,
        emissions=4.0,
        occurred_at=WINDOW_START - timedelta(microseconds=1),
    )

    summary = await FootprintAggregator(test_db_session).summarize(
        test_user.id, WINDOW_START, WINDOW_END
    )

    assert summary.total == Decimal("1.0")
    assert summary.total_entries == 1


@pytest.mark.asyncio
async def test_summary_ignores_other_users(test_db_session, test_user):
    other_user = await UserFactory()
    await CarbonEntryFactory(user_id=other_user.id, occurred_at=datetime(2025, 11, 5))

    summary = await FootprintAggregator(test_db_session).summarize(
        test_user.id, WINDOW_START, WINDOW_END
    )

    assert summary.total == 0
    assert summary.total_entries == 0
    assert summary.by_category == {
        "transport": Decimal("0"),
        "food": Decimal("0"),
        "energy": Decimal("0"),
    }
    assert summary.recent_entries == []


@pytest.mark.asyncio
async def test_summary_keeps_ten_newest_entries(test_db_session, test_user):
    for hour in range(12):
        await CarbonEntryFactory(
            user_id=test_user.id,
            emissions=1.0,
            occurred_at=datetime(2025, 11, 10, hour, 0),
        )

    summary = await FootprintAggregator(test_db_session).summarize(
        test_user.id, WINDOW_START, WINDOW_END
    )

    assert summary.total_entries == 12
    assert summary.total == Decimal("12.0")
    assert len(summary.recent_entries) == 10
    assert summary.recent_entries[0].occurred_at == datetime(2025, 11, 10, 11, 0)
    assert summary.recent_entries[-1].occurred_at == datetime(2025, 11, 10, 2, 0)


@pytest.mark.asyncio
async def test_summary_is_idempotent(test_db_session, test_user):
    await CarbonEntryFactory(user_id=test_user.id, emissions=3.5, occurred_at=datetime(2025, 11, 3))
    aggregator = FootprintAggregator(test_db_session)

    first = await aggregator.summarize(test_user.id, WINDOW_START, WINDOW_END)
    second = await aggregator.summarize(test_user.id, WINDOW_START, WINDOW_END)

    assert first.by_category == second.by_category
    assert first.total == second.total


@pytest.mark.asyncio
async def test_summary_defaults_to_last_thirty_days(test_db_session, test_user):
    await CarbonEntryFactory(user_id=test_user.id, emissions=2.0)
    await CarbonEntryFactory(
        user_id=test_user.id,
        emissions=5.0,
        occurred_at=utc_now() - timedelta(days=31),
    )

    summary = await FootprintAggregator(test_db_session).summarize(test_user.id)

    assert summary.window_end - summary.window_start == timedelta(days=30)
    assert summary.total == Decimal("2.0")


@pytest.mark.asyncio
async def test_summary_rejects_inverted_window(test_db_session, test_user):
    with pytest.raises(InputError):
        await FootprintAggregator(test_db_session).summarize(
            test_user.id, WINDOW_END, WINDOW_START
        )


@pytest.mark.asyncio
async def test_monthly_totals_oldest_first(test_db_session, test_user):
    now = datetime(2025, 12, 15, 12, 0)
    await CarbonEntryFactory(user_id=test_user.id, emissions=10.0, occurred_at=datetime(2025, 10, 2))
    await CarbonEntryFactory(user_id=test_user.id, emissions=1.5, occurred_at=datetime(2025, 12, 1))
    await CarbonEntryFactory(user_id=test_user.id, emissions=2.5, occurred_at=datetime(2025, 12, 14))
    # before the first requested month
    await CarbonEntryFactory(user_id=test_user.id, emissions=99.0, occurred_at=datetime(2025, 9, 30))

    totals = await FootprintAggregator(test_db_session).monthly_totals(test_user.id, 3, now=now)

    assert totals == [Decimal("10.0"), Decimal("0"), Decimal("4.0")]


@pytest.mark.asyncio
async def test_monthly_totals_cross_year_boundary(test_db_session, test_user):
    now = datetime(2026, 1, 10)
    await CarbonEntryFactory(user_id=test_user.id, emissions=7.0, occurred_at=datetime(2025, 12, 20))

    totals = await FootprintAggregator(test_db_session).monthly_totals(test_user.id, 2, now=now)

    assert totals == [Decimal("7.0"), Decimal("0")]


@pytest.mark.asyncio
@pytest.mark.parametrize("months", [0, -3])
async def test_monthly_totals_rejects_empty_range(test_db_session, test_user, months):
    with pytest.raises(InputError):
        await FootprintAggregator(test_db_session).monthly_totals(test_user.id, months)
