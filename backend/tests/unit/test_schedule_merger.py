"""
Tests for ScheduleMerger against a mocked repository.
"""

from datetime import date, datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from app.models.enums import MealSlot
from app.models.plan import PlanEntry
from app.models.schedule import ScheduleEntry
from app.services.plan_expander import ExpandedEntry
from app.services.schedule_merger import ScheduleMerger

SPAN = (date(2025, 1, 6), date(2025, 1, 12))


def _candidate(item_ref: str, day: date, subtype: MealSlot | None = MealSlot.LUNCH) -> ExpandedEntry:
    return ExpandedEntry(date=day, entry=PlanEntry(item_ref=item_ref, subtype=subtype, time="12:30"))


def _existing(item_ref: str, day: date) -> ScheduleEntry:
    return ScheduleEntry(
        id=uuid4(),
        user_id="test_user",
        item_ref=item_ref,
        subtype=MealSlot.LUNCH,
        date=day,
        created_at=datetime(2025, 1, 1),
    )


@pytest.mark.asyncio
async def test_merge_skips_existing_identity():
    repo = AsyncMock()
    repo.find_by_identity.side_effect = [_existing("soup", date(2025, 1, 8)), None]
    repo.insert_many.return_value = 1
    merger = ScheduleMerger(repo)

    outcome = await merger.merge(
        "test_user",
        [_candidate("soup", date(2025, 1, 8)), _candidate("stew", date(2025, 1, 9))],
        SPAN,
        replace_existing=False,
    )

    assert outcome.inserted_count == 1
    assert outcome.candidate_count == 2
    assert outcome.deleted_range is None
    repo.delete_in_range.assert_not_called()
    repo.replace_in_range.assert_not_called()

    inserted = repo.insert_many.call_args.args[0]
    assert [e.item_ref for e in inserted] == ["stew"]
    assert inserted[0].user_id == "test_user"
    assert inserted[0].date == date(2025, 1, 9)
    assert inserted[0].time == "12:30"


@pytest.mark.asyncio
async def test_merge_nothing_new_does_not_write():
    repo = AsyncMock()
    repo.find_by_identity.return_value = _existing("soup", date(2025, 1, 8))
    merger = ScheduleMerger(repo)

    outcome = await merger.merge(
        "test_user", [_candidate("soup", date(2025, 1, 8))], SPAN, replace_existing=False
    )

    assert outcome.inserted_count == 0
    repo.insert_many.assert_not_called()


@pytest.mark.asyncio
async def test_merge_passes_subtype_to_identity_lookup():
    repo = AsyncMock()
    repo.find_by_identity.return_value = None
    repo.insert_many.return_value = 1
    merger = ScheduleMerger(repo)

    await merger.merge(
        "test_user",
        [_candidate("run", date(2025, 1, 7), subtype=None)],
        SPAN,
        replace_existing=False,
    )

    repo.find_by_identity.assert_awaited_once_with("test_user", "run", date(2025, 1, 7), None)


@pytest.mark.asyncio
async def test_replace_clears_span_and_inserts_all():
    repo = AsyncMock()
    repo.replace_in_range.return_value = 2
    merger = ScheduleMerger(repo)
    plan_id = uuid4()

    outcome = await merger.merge(
        "test_user",
        [_candidate("soup", date(2025, 1, 8)), _candidate("stew", date(2025, 1, 9))],
        SPAN,
        replace_existing=True,
        plan_id=plan_id,
    )

    assert outcome.inserted_count == 2
    assert outcome.deleted_range == SPAN
    repo.find_by_identity.assert_not_called()

    user_id, start, end, entries = repo.replace_in_range.call_args.args
    assert (user_id, start, end) == ("test_user", *SPAN)
    assert [e.item_ref for e in entries] == ["soup", "stew"]
    assert all(e.plan_id == plan_id for e in entries)


@pytest.mark.asyncio
async def test_replace_with_no_candidates_still_clears_span():
    repo = AsyncMock()
    repo.replace_in_range.return_value = 0
    merger = ScheduleMerger(repo)

    outcome = await merger.merge("test_user", [], SPAN, replace_existing=True)

    assert outcome.inserted_count == 0
    repo.replace_in_range.assert_awaited_once_with("test_user", *SPAN, [])
