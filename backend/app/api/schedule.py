"""
Schedule API endpoints.

Read and edit the current user's dated schedule entries.
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUser, ScheduleRepo
from app.core.exceptions import NotFoundError, ValidationError
from app.models.schedule import ScheduleEntry, ScheduleEntryCreate, ScheduleEntryUpdate
from app.utils.date_utils import to_canonical_date

router = APIRouter()

MAX_RANGE_DAYS = 366


@router.get("", response_model=list[ScheduleEntry])
async def list_schedule(
    user: CurrentUser,
    repo: ScheduleRepo,
    start: str = Query(..., description="First day, YYYY-MM-DD"),
    end: str = Query(..., description="Last day (inclusive), YYYY-MM-DD"),
) -> list[ScheduleEntry]:
    """List entries in an inclusive date range."""
    start_date = to_canonical_date(start)
    end_date = to_canonical_date(end)
    if end_date < start_date:
        raise ValidationError("end must not be before start")
    if (end_date - start_date).days > MAX_RANGE_DAYS:
        raise ValidationError(f"Range must not exceed {MAX_RANGE_DAYS} days")
    return await repo.find_in_range(user.id, start_date, end_date)


@router.get("/{day}", response_model=list[ScheduleEntry])
async def list_schedule_for_day(day: str, user: CurrentUser, repo: ScheduleRepo) -> list[ScheduleEntry]:
    """List entries on one date."""
    entry_date: date = to_canonical_date(day)
    return await repo.find_in_range(user.id, entry_date, entry_date)


@router.post("", response_model=ScheduleEntry, status_code=status.HTTP_201_CREATED)
async def add_schedule_entry(
    payload: ScheduleEntryCreate,
    user: CurrentUser,
    repo: ScheduleRepo,
) -> ScheduleEntry:
    """Add a single entry to the schedule."""
    return await repo.create(user.id, payload)


@router.patch("/{entry_id}", response_model=ScheduleEntry)
async def update_schedule_entry(
    entry_id: UUID,
    update: ScheduleEntryUpdate,
    user: CurrentUser,
    repo: ScheduleRepo,
) -> ScheduleEntry:
    """Mark an entry pending, done or skipped, or edit its note."""
    entry = await repo.update(user.id, entry_id, update)
    if not entry:
        raise NotFoundError(f"Schedule entry {entry_id} not found")
    return entry


@router.delete("/date/{day}")
async def clear_schedule_day(day: str, user: CurrentUser, repo: ScheduleRepo) -> dict:
    """Delete every entry on one date."""
    deleted = await repo.delete_by_date(user.id, to_canonical_date(day))
    return {"deleted": deleted}


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_schedule_entry(entry_id: UUID, user: CurrentUser, repo: ScheduleRepo):
    """Remove one entry from the schedule."""
    deleted = await repo.delete(user.id, entry_id)
    if not deleted:
        raise NotFoundError(f"Schedule entry {entry_id} not found")
