"""
Plan expansion.

Turns a plan definition anchored at a start date into concrete
(date, entry) candidates:

- DAILY: every entry lands on the start date.
- WEEKLY: each entry lands on the first matching weekday in
  [start, start + 6]; a weekday equal to the start's maps to the start.
- MONTHLY: day_number n lands on start + (n - 1), a pure offset that
  ignores calendar month lengths.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from app.core.logger import setup_logger
from app.models.enums import PlanType
from app.models.plan import Plan, PlanEntry
from app.models.schedule import IdentityKey, identity_key
from app.utils.date_utils import add_days

logger = setup_logger(__name__)

MONTHLY_PLAN_DAYS = 30


@dataclass(frozen=True)
class ExpandedEntry:
    """A plan entry resolved to a calendar date."""

    date: date
    entry: PlanEntry

    def key(self, user_id: str) -> IdentityKey:
        return identity_key(user_id, self.entry.item_ref, self.date, self.entry.subtype)


def plan_span(plan_type: PlanType, start_date: date) -> tuple[date, date]:
    """Inclusive date range a plan occupies once anchored at start_date."""
    return start_date, add_days(start_date, plan_type.span_days)


def resolve_entry_date(
    plan_type: PlanType, entry: PlanEntry, start_date: date
) -> Optional[date]:
    """Compute the date of one entry, or None when its day discriminator is invalid."""
    if plan_type == PlanType.DAILY:
        return start_date

    if plan_type == PlanType.WEEKLY:
        if entry.day_of_week is None:
            return None
        days_to_add = (entry.day_of_week.weekday - start_date.weekday()) % 7
        return add_days(start_date, days_to_add)

    if plan_type == PlanType.MONTHLY:
        day_number = entry.day_number
        if day_number is None or not 1 <= day_number <= MONTHLY_PLAN_DAYS:
            return None
        return add_days(start_date, day_number - 1)

    return None


def expand(plan: Plan, start_date: date) -> list[ExpandedEntry]:
    """
    Expand every plan entry to a concrete date.

    Entries with an invalid day discriminator are dropped with a warning;
    the rest of the plan is still expanded. Plan entry order is preserved.
    """
    expanded: list[ExpandedEntry] = []
    for index, entry in enumerate(plan.entries):
        try:
            target = resolve_entry_date(plan.type, entry, start_date)
        except OverflowError:
            target = None
        if target is None:
            logger.warning(
                f"Skipping entry {index} of plan {plan.id} ({plan.type.value}): "
                f"invalid day (day_of_week={entry.day_of_week}, day_number={entry.day_number})"
            )
            continue
        expanded.append(ExpandedEntry(date=target, entry=entry))
    return expanded


def dedupe_candidates(
    user_id: str, candidates: list[ExpandedEntry]
) -> tuple[list[ExpandedEntry], int]:
    """
    Drop candidates whose identity key repeats an earlier one.

    Returns:
        (unique candidates in original order, number dropped)
    """
    seen: set[IdentityKey] = set()
    unique: list[ExpandedEntry] = []
    for candidate in candidates:
        key = candidate.key(user_id)
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique, len(candidates) - len(unique)
