"""
Plan application service.

Applies a plan definition to a user's schedule starting at a given date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union
from uuid import UUID

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logger import setup_logger
from app.interfaces.plan_repository import IPlanRepository
from app.interfaces.schedule_repository import IScheduleRepository
from app.models.schedule import ApplyResult
from app.services.plan_expander import dedupe_candidates, expand, plan_span
from app.services.schedule_merger import ScheduleMerger
from app.utils.date_utils import to_canonical_date

logger = setup_logger(__name__)


class PlanApplicationService:
    """Service for expanding a plan into dated schedule entries for a user."""

    def __init__(
        self,
        plan_repo: IPlanRepository,
        schedule_repo: IScheduleRepository,
    ):
        self.plan_repo = plan_repo
        self.schedule_repo = schedule_repo
        self.merger = ScheduleMerger(schedule_repo)

    async def apply_plan(
        self,
        user_id: str,
        plan_ref: Optional[Union[UUID, str]],
        start_date: Optional[Union[str, date, datetime]],
        replace_existing: bool = False,
    ) -> ApplyResult:
        """Apply a plan to the user's schedule.

        The start date is mandatory; callers that want "today" must resolve it
        themselves.

        Raises:
            ValidationError: plan_ref or start_date missing, start_date unparseable,
                or the plan span would run past the last representable date
            NotFoundError: plan does not exist or is inactive
        """
        if not plan_ref:
            raise ValidationError("planId is required")
        if start_date is None or (isinstance(start_date, str) and not start_date.strip()):
            raise ValidationError("startDate is required")

        start = to_canonical_date(start_date)

        plan = await self.plan_repo.find_active(plan_ref)
        if not plan:
            raise NotFoundError(f"Plan {plan_ref} not found or inactive")

        try:
            span = plan_span(plan.type, start)
        except OverflowError as e:
            raise ValidationError("startDate out of range") from e

        candidates = expand(plan, start)
        unique, dropped = dedupe_candidates(user_id, candidates)
        if dropped:
            logger.warning(
                f"Plan {plan.id} produced {dropped} duplicate entries; keeping first occurrences"
            )

        outcome = await self.merger.merge(
            user_id,
            unique,
            span,
            replace_existing=replace_existing,
            plan_id=plan.id,
        )

        total = len(candidates)
        result = ApplyResult(
            inserted_count=outcome.inserted_count,
            total_candidates=total,
            skipped_count=total - outcome.inserted_count,
            start_date=span[0],
            end_date=span[1],
        )
        logger.info(
            f"Applied plan {plan.id} ({plan.type.value}) for user {user_id}: "
            f"{result.inserted_count}/{total} inserted, {result.skipped_count} skipped, "
            f"{span[0].isoformat()}..{span[1].isoformat()}, replace={replace_existing}"
        )
        return result
