"""
Plan definition service.

Validates plan entries against the plan's type and kind before they are
stored.
"""

from __future__ import annotations

from uuid import UUID

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logger import setup_logger
from app.interfaces.plan_repository import IPlanRepository
from app.models.enums import PlanKind, PlanType
from app.models.plan import Plan, PlanCreate, PlanEntry, PlanUpdate
from app.services.plan_expander import MONTHLY_PLAN_DAYS

logger = setup_logger(__name__)


def validate_entries(plan_type: PlanType, kind: PlanKind, entries: list[PlanEntry]) -> None:
    """Raise ValidationError if any entry does not fit the plan's type or kind."""
    if not entries:
        raise ValidationError("A plan must contain at least one entry")

    for index, entry in enumerate(entries, start=1):
        label = f"Entry {index} ({entry.item_ref})"

        if plan_type == PlanType.WEEKLY and entry.day_of_week is None:
            raise ValidationError(f"{label}: weekly plans require day_of_week (MON..SUN)")

        if plan_type == PlanType.MONTHLY:
            if entry.day_number is None or not 1 <= entry.day_number <= MONTHLY_PLAN_DAYS:
                raise ValidationError(
                    f"{label}: monthly plans require day_number from 1 to {MONTHLY_PLAN_DAYS}"
                )

        if plan_type == PlanType.DAILY:
            if entry.day_of_week is not None or entry.day_number not in (None, 1):
                raise ValidationError(f"{label}: daily plans cover a single day")

        if kind == PlanKind.MEAL and entry.subtype is None:
            raise ValidationError(f"{label}: meal plan entries require a meal slot")
        if kind == PlanKind.TRAINING and entry.subtype is not None:
            raise ValidationError(f"{label}: training plan entries have no meal slot")


class PlanService:
    """Service for managing plan definitions."""

    def __init__(self, plan_repo: IPlanRepository):
        self.plan_repo = plan_repo

    async def create_plan(self, data: PlanCreate) -> Plan:
        validate_entries(data.type, data.kind, data.entries)
        plan = await self.plan_repo.create(data)
        logger.info(f"Created {plan.kind.value} plan {plan.id} ({plan.type.value})")
        return plan

    async def update_plan(self, plan_id: UUID, update: PlanUpdate) -> Plan:
        current = await self.plan_repo.get(plan_id)
        if not current:
            raise NotFoundError(f"Plan {plan_id} not found")

        # Re-validate whenever anything the entries depend on changes
        if update.entries is not None or update.type is not None or update.kind is not None:
            validate_entries(
                update.type or current.type,
                update.kind or current.kind,
                update.entries if update.entries is not None else current.entries,
            )
        return await self.plan_repo.update(plan_id, update)

    async def toggle_active(self, plan_id: UUID) -> Plan:
        current = await self.plan_repo.get(plan_id)
        if not current:
            raise NotFoundError(f"Plan {plan_id} not found")
        return await self.plan_repo.update(
            plan_id, PlanUpdate(is_active=not current.is_active)
        )
