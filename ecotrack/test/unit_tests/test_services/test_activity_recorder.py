"""
Service tests for the activity recorder.
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import SQLAlchemyError

from ecotrack.core.exceptions import InputError, StorageError
from ecotrack.database.repositories import ActivityRepository, CarbonEntryRepository
from ecotrack.services.recorders.activity_recorder import ActivityRecorder
from ecotrack.test.factory.activity import ActivityFactory, CarbonEntryFactory
from ecotrack.test.factory.user import UserFactory


@pytest.mark.asyncio
async def test_record_stores_activity_and_entry(test_db_session, test_user):
    recorder = ActivityRecorder(test_db_session)

    activity, entry = await recorder.record(
        user_id=test_user.id,
        category="transport",
        activity_type="car",
        amount=10,
        description="  Commute <b>to work</b> ",
    )

    assert activity.unit == "miles"
    assert activity.description == "Commute bto work/b"
    assert entry.activity_id == activity.id
    assert entry.emissions == 4.04
    assert entry.category == "transport"
    assert entry.occurred_at == activity.occurred_at

    assert await ActivityRepository(test_db_session).count() == 1
    assert await CarbonEntryRepository(test_db_session).count() == 1


@pytest.mark.asyncio
async def test_record_converts_aware_datetime_to_utc(test_db_session, test_user):
    recorder = ActivityRecorder(test_db_session)
    occurred_at = datetime(2025, 11, 24, 10, 30, tzinfo=timezone(timedelta(hours=2)))

    activity, entry = await recorder.record(
        test_user.id, "energy", "electricity", 100, occurred_at=occurred_at
    )

    assert activity.occurred_at == datetime(2025, 11, 24, 8, 30)
    assert entry.occurred_at == datetime(2025, 11, 24, 8, 30)
    assert entry.emissions == 50.0


@pytest.mark.asyncio
async def test_record_unknown_type_stores_zero(test_db_session, test_user):
    recorder = ActivityRecorder(test_db_session)

    _, entry = await recorder.record(test_user.id, "food", "dragonfruit", 3)

    assert entry.emissions == 0


@pytest.mark.asyncio
async def test_record_rejects_non_finite_amount(test_db_session, test_user):
    recorder = ActivityRecorder(test_db_session)

    with pytest.raises(InputError):
        await recorder.record(test_user.id, "transport", "car", float("nan"))

    assert await ActivityRepository(test_db_session).count() == 0


@pytest.mark.asyncio
async def test_record_is_atomic_when_entry_write_fails(
    test_db_session, test_user, monkeypatch
):
    """A failed carbon entry write must not leave the activity behind."""
    recorder = ActivityRecorder(test_db_session)

    async def failing_create(**data):
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(recorder.entry_repo, "create", failing_create)

    with pytest.raises(StorageError):
        await recorder.record(test_user.id, "transport", "car", 10)

    assert await ActivityRepository(test_db_session).count() == 0
    assert await CarbonEntryRepository(test_db_session).count() == 0


@pytest.mark.asyncio
async def test_list_activities_newest_first_with_paging(test_db_session, test_user):
    now = datetime(2025, 11, 24, 12, 0)
    for days_ago in range(5):
        await ActivityFactory(
            user_id=test_user.id,
            occurred_at=now - timedelta(days=days_ago),
            description=f"{days_ago} days ago",
        )

    recorder = ActivityRecorder(test_db_session)
    first_page = await recorder.list_activities(test_user.id, page=1, limit=2)
    last_page = await recorder.list_activities(test_user.id, page=3, limit=2)

    assert [a.description for a in first_page] == ["0 days ago", "1 days ago"]
    assert [a.description for a in last_page] == ["4 days ago"]


@pytest.mark.asyncio
async def test_list_activities_filters_by_category_and_owner(test_db_session, test_user):
    other_user = await UserFactory()
    await ActivityFactory(user_id=test_user.id)
    await ActivityFactory(user_id=test_user.id, category="food", activity_type="beef", unit="kg")
    await ActivityFactory(user_id=other_user.id)

    recorder = ActivityRecorder(test_db_session)
    transport = await recorder.list_activities(test_user.id, category="transport")
    everything = await recorder.list_activities(test_user.id)

    assert len(transport) == 1
    assert transport[0].category == "transport"
    assert len(everything) == 2


@pytest.mark.asyncio
async def test_delete_removes_activity_and_entry(test_db_session, test_user):
    activity = await ActivityFactory(user_id=test_user.id)
    await CarbonEntryFactory(user_id=test_user.id, activity_id=activity.id)

    recorder = ActivityRecorder(test_db_session)

    assert await recorder.delete(test_user.id, activity.id) is True
    assert await ActivityRepository(test_db_session).count() == 0
    assert await CarbonEntryRepository(test_db_session).count() == 0


@pytest.mark.asyncio
async def test_delete_other_users_activity_is_refused(test_db_session, test_user):
    other_user = await UserFactory()
    activity = await ActivityFactory(user_id=other_user.id)

    recorder = ActivityRecorder(test_db_session)

    assert await recorder.delete(test_user.id, activity.id) is False
    assert await ActivityRepository(test_db_session).count() == 1
