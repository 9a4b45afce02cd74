"""
Plan API endpoints.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from app.api.deps import CurrentUser, PlanRepo, ScheduleRepo
from app.core.exceptions import NotFoundError
from app.models.enums import PlanKind, PlanType
from app.models.plan import Plan, PlanCreate, PlanUpdate
from app.models.schedule import ApplyPlanRequest, ApplyPlanResponse
from app.services.plan_application_service import PlanApplicationService
from app.services.plan_service import PlanService
from app.utils.date_utils import format_canonical_date

router = APIRouter()


@router.post("/apply", response_model=ApplyPlanResponse)
async def apply_plan(
    payload: ApplyPlanRequest,
    user: CurrentUser,
    plan_repo: PlanRepo,
    schedule_repo: ScheduleRepo,
) -> ApplyPlanResponse:
    """Apply a plan to the current user's schedule from startDate."""
    service = PlanApplicationService(plan_repo=plan_repo, schedule_repo=schedule_repo)
    result = await service.apply_plan(
        user.id,
        payload.plan_id,
        payload.start_date,
        replace_existing=payload.replace_existing,
    )
    return ApplyPlanResponse(
        count=result.inserted_count,
        total=result.total_candidates,
        skipped=result.skipped_count,
        start_date=format_canonical_date(result.start_date),
        end_date=format_canonical_date(result.end_date),
    )


@router.get("", response_model=list[Plan])
async def list_plans(
    repo: PlanRepo,
    kind: Optional[PlanKind] = Query(None, description="meal or training"),
    type: Optional[PlanType] = Query(None, description="daily, weekly or monthly"),
    goal: Optional[str] = Query(None, description="Only plans tagged with this goal"),
    level: Optional[str] = Query(None),
    include_inactive: bool = Query(False, description="Include inactive plans"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> list[Plan]:
    """List plan definitions (active only by default)."""
    return await repo.list(
        kind=kind,
        plan_type=type,
        goal=goal,
        level=level,
        include_inactive=include_inactive,
        limit=limit,
        offset=offset,
    )


@router.get("/{plan_id}", response_model=Plan)
async def get_plan(plan_id: UUID, repo: PlanRepo) -> Plan:
    """Get a plan definition by ID."""
    plan = await repo.get(plan_id)
    if not plan:
        raise NotFoundError(f"Plan {plan_id} not found")
    return plan


@router.post("", response_model=Plan, status_code=status.HTTP_201_CREATED)
async def create_plan(payload: PlanCreate, user: CurrentUser, repo: PlanRepo) -> Plan:
    """Create a new plan definition."""
    return await PlanService(repo).create_plan(payload)


@router.patch("/{plan_id}", response_model=Plan)
async def update_plan(
    plan_id: UUID,
    update: PlanUpdate,
    user: CurrentUser,
    repo: PlanRepo,
) -> Plan:
    """Update a plan definition."""
    return await PlanService(repo).update_plan(plan_id, update)


@router.post("/{plan_id}/toggle", response_model=Plan)
async def toggle_plan(plan_id: UUID, user: CurrentUser, repo: PlanRepo) -> Plan:
    """Flip a plan between active and inactive."""
    return await PlanService(repo).toggle_active(plan_id)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(plan_id: UUID, user: CurrentUser, repo: PlanRepo):
    """Delete a plan definition."""
    deleted = await repo.delete(plan_id)
    if not deleted:
        raise NotFoundError(f"Plan {plan_id} not found")
