"""
Schedule models.

A schedule entry is a single dated, per-user occurrence of a meal or a
training exercise. No two entries of one user share an identity key
(user_id, item_ref, date, subtype).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import MealSlot, ScheduleStatus

IdentityKey = tuple[str, str, date, Optional[str]]


def identity_key(
    user_id: str,
    item_ref: str,
    entry_date: date,
    subtype: Optional[MealSlot | str],
) -> IdentityKey:
    """Build the identity key used for duplicate detection."""
    if isinstance(subtype, MealSlot):
        subtype = subtype.value
    return (user_id, item_ref, entry_date, subtype or None)


class ScheduleEntryBase(BaseModel):
    """Base fields for schedule entries."""

    item_ref: str = Field(..., min_length=1, max_length=100)
    subtype: Optional[MealSlot] = None
    date: date
    time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$")
    order: int = Field(0, ge=0)
    status: ScheduleStatus = ScheduleStatus.PENDING
    note: Optional[str] = Field(None, max_length=1000)


class ScheduleEntryCreate(ScheduleEntryBase):
    """Add a single entry to the current user's schedule."""

    pass


class ScheduleEntryUpdate(BaseModel):
    """Mark an entry done or skipped, or edit its note."""

    status: Optional[ScheduleStatus] = None
    note: Optional[str] = Field(None, max_length=1000)


class ScheduleEntryInsert(ScheduleEntryBase):
    """Fully attributed entry handed to the repository for bulk insertion."""

    user_id: str
    plan_id: Optional[UUID] = None

    @property
    def key(self) -> IdentityKey:
        return identity_key(self.user_id, self.item_ref, self.date, self.subtype)


class ScheduleEntry(ScheduleEntryBase):
    """Persisted schedule entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: str
    plan_id: Optional[UUID] = None
    created_at: datetime

    @property
    def key(self) -> IdentityKey:
        return identity_key(self.user_id, self.item_ref, self.date, self.subtype)


class ApplyResult(BaseModel):
    """Summary of a plan application (not persisted)."""

    inserted_count: int
    total_candidates: int
    skipped_count: int
    start_date: date
    end_date: date


class ApplyPlanRequest(BaseModel):
    """Body of POST /api/plans/apply."""

    model_config = ConfigDict(populate_by_name=True)

    plan_id: Optional[str] = Field(None, alias="planId")
    start_date: Optional[str] = Field(None, alias="startDate", description="YYYY-MM-DD")
    replace_existing: bool = Field(False, alias="replaceExisting")


class ApplyPlanResponse(BaseModel):
    """Response of POST /api/plans/apply."""

    model_config = ConfigDict(populate_by_name=True)

    count: int
    total: int
    skipped: int
    start_date: str = Field(..., alias="startDate")
    end_date: str = Field(..., alias="endDate")
