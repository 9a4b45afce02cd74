"""
Enum definitions for the application.

These enums are used across models and provide type-safe plan/schedule values.
"""

from enum import Enum
from typing import Optional


class PlanKind(str, Enum):
    """What a plan schedules."""

    MEAL = "meal"
    TRAINING = "training"


class PlanType(str, Enum):
    """
    Recurrence of a plan.

    DAILY = a single day anchored at the start date
    WEEKLY = one week, entries keyed by day of week
    MONTHLY = 30 consecutive days, entries keyed by day number (1-30)
    """

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def span_days(self) -> int:
        """Number of days between the first and last day of the span."""
        return _SPAN_DAYS[self]


_SPAN_DAYS = {
    PlanType.DAILY: 0,
    PlanType.WEEKLY: 6,
    PlanType.MONTHLY: 29,
}


class MealSlot(str, Enum):
    """Meal slot of a meal plan entry."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class DayOfWeek(str, Enum):
    """Day of week for weekly plan entries (MON=0 ... SUN=6, as date.weekday())."""

    MON = "MON"
    TUE = "TUE"
    WED = "WED"
    THU = "THU"
    FRI = "FRI"
    SAT = "SAT"
    SUN = "SUN"

    @property
    def weekday(self) -> int:
        return list(DayOfWeek).index(self)

    @classmethod
    def from_weekday(cls, weekday: int) -> "DayOfWeek":
        return list(cls)[weekday]

    @classmethod
    def parse(cls, value: object) -> Optional["DayOfWeek"]:
        """Parse "Wed", "wednesday" or "WED"; returns None when unrecognised."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        return _DAY_ALIASES.get(value.strip().lower())


_DAY_ALIASES = {}
for _day, _full in zip(
    DayOfWeek,
    ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"),
):
    _DAY_ALIASES[_day.value.lower()] = _day
    _DAY_ALIASES[_full] = _day


class ScheduleStatus(str, Enum):
    """Completion state of a schedule entry."""

    PENDING = "pending"
    DONE = "done"
    SKIPPED = "skipped"
