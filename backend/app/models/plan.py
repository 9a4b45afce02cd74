"""
Plan models.

A plan is a reusable template of meals or training exercises that recurs
daily, weekly or monthly. Plans are read-only to the scheduling core.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import DayOfWeek, MealSlot, PlanKind, PlanType


class PlanEntry(BaseModel):
    """One item within a plan."""

    item_ref: str = Field(..., min_length=1, max_length=100, description="Meal or training ID")
    subtype: Optional[MealSlot] = Field(None, description="Meal slot; empty for training")
    day_of_week: Optional[DayOfWeek] = Field(None, description="For WEEKLY plans")
    day_number: Optional[int] = Field(None, description="For MONTHLY plans, 1-30")
    time: Optional[str] = Field(None, pattern=r"^\d{2}:\d{2}$", description="Advisory HH:MM")
    order: int = Field(0, ge=0, description="Ordering hint within a day")

    @field_validator("day_of_week", mode="before")
    @classmethod
    def parse_day_of_week(cls, v):
        if v is None or v == "":
            return None
        day = DayOfWeek.parse(v)
        if day is None:
            raise ValueError(f"Unknown day of week: {v!r}")
        return day


def _strip_goals(goals: Optional[list[str]]) -> Optional[list[str]]:
    if goals is None:
        return None
    return [goal.strip() for goal in goals if goal and goal.strip()]


class PlanBase(BaseModel):
    """Base fields for plans."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    kind: PlanKind = PlanKind.MEAL
    type: PlanType
    goals: list[str] = Field(default_factory=list)
    level: Optional[str] = Field(None, max_length=50)
    is_active: bool = True

    normalize_goals = field_validator("goals")(_strip_goals)


class PlanCreate(PlanBase):
    """Create a new plan definition."""

    entries: list[PlanEntry] = Field(default_factory=list)


class PlanUpdate(BaseModel):
    """Update plan fields."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    kind: Optional[PlanKind] = None
    type: Optional[PlanType] = None
    goals: Optional[list[str]] = None
    level: Optional[str] = Field(None, max_length=50)
    is_active: Optional[bool] = None
    entries: Optional[list[PlanEntry]] = None

    normalize_goals = field_validator("goals")(_strip_goals)


class Plan(PlanBase):
    """Plan definition with metadata."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    entries: list[PlanEntry] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
