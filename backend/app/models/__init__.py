"""Pydantic models (schemas) for the application."""

from app.models.enums import (
    DayOfWeek,
    MealSlot,
    PlanKind,
    PlanType,
    ScheduleStatus,
)
from app.models.plan import Plan, PlanCreate, PlanEntry, PlanUpdate
from app.models.schedule import (
    ApplyPlanRequest,
    ApplyPlanResponse,
    ApplyResult,
    ScheduleEntry,
    ScheduleEntryCreate,
    ScheduleEntryInsert,
    ScheduleEntryUpdate,
)

__all__ = [
    # Enums
    "PlanKind",
    "PlanType",
    "MealSlot",
    "DayOfWeek",
    "ScheduleStatus",
    # Plan
    "Plan",
    "PlanCreate",
    "PlanEntry",
    "PlanUpdate",
    # Schedule
    "ScheduleEntry",
    "ScheduleEntryCreate",
    "ScheduleEntryInsert",
    "ScheduleEntryUpdate",
    "ApplyResult",
    "ApplyPlanRequest",
    "ApplyPlanResponse",
]
