"""
SQLite implementation of plan repository.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, select

from app.core.exceptions import NotFoundError, ValidationError
from app.infrastructure.local.database import PlanORM, get_session_factory
from app.interfaces.plan_repository import IPlanRepository
from app.models.enums import PlanKind, PlanType
from app.models.plan import Plan, PlanCreate, PlanUpdate

# Columns that may be changed but never cleared
_REQUIRED_FIELDS = {"name", "kind", "type", "goals", "entries", "is_active"}


class SqlitePlanRepository(IPlanRepository):
    """SQLite implementation of plan repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: PlanORM) -> Plan:
        """Convert ORM object to Pydantic model."""
        return Plan.model_validate(orm, from_attributes=True)

    async def _get_orm(self, session, plan_id: UUID | str) -> Optional[PlanORM]:
        result = await session.execute(select(PlanORM).where(PlanORM.id == str(plan_id)))
        return result.scalar_one_or_none()

    async def create(self, data: PlanCreate) -> Plan:
        """Create a new plan definition."""
        async with self._session_factory() as session:
            orm = PlanORM(
                id=str(uuid4()),
                name=data.name,
                description=data.description,
                kind=data.kind.value,
                type=data.type.value,
                goals=data.goals,
                level=data.level,
                entries=[entry.model_dump(mode="json") for entry in data.entries],
                is_active=data.is_active,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, plan_id: UUID | str) -> Optional[Plan]:
        """Get a plan by ID."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, plan_id)
            return self._orm_to_model(orm) if orm else None

    async def find_active(self, plan_id: UUID | str) -> Optional[Plan]:
        """Get a plan by ID only if it is active."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(PlanORM).where(
                    and_(
                        PlanORM.id == str(plan_id),
                        PlanORM.is_active == True,  # noqa: E712
                    )
                )
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def list(
        self,
        kind: Optional[PlanKind] = None,
        plan_type: Optional[PlanType] = None,
        goal: Optional[str] = None,
        level: Optional[str] = None,
        include_inactive: bool = False,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Plan]:
        """List plan definitions, newest first."""
        async with self._session_factory() as session:
            conditions = []
            if kind is not None:
                conditions.append(PlanORM.kind == kind.value)
            if plan_type is not None:
                conditions.append(PlanORM.type == plan_type.value)
            if level is not None:
                conditions.append(PlanORM.level == level)
            if not include_inactive:
                conditions.append(PlanORM.is_active == True)  # noqa: E712

            query = select(PlanORM)
            if conditions:
                query = query.where(and_(*conditions))
            query = query.order_by(PlanORM.created_at.desc())
            result = await session.execute(query)
            plans = [self._orm_to_model(orm) for orm in result.scalars().all()]

        # goals is a JSON array; membership is filtered here to stay portable
        if goal is not None:
            plans = [plan for plan in plans if goal in plan.goals]
        return plans[offset : offset + limit]

    async def update(self, plan_id: UUID | str, update: PlanUpdate) -> Plan:
        """Update a plan definition."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, plan_id)
            if not orm:
                raise NotFoundError(f"Plan {plan_id} not found")

            update_data = update.model_dump(exclude_unset=True, mode="json")
            for field, value in update_data.items():
                if value is None and field in _REQUIRED_FIELDS:
                    raise ValidationError(f"{field} cannot be null")
                setattr(orm, field, value)

            orm.updated_at = datetime.utcnow()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, plan_id: UUID | str) -> bool:
        """Delete a plan definition."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, plan_id)
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True
