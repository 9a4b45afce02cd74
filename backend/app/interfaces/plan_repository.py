"""
Plan repository interface.

Defines contract for plan definition persistence operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from app.models.enums import PlanKind, PlanType
from app.models.plan import Plan, PlanCreate, PlanUpdate


class IPlanRepository(ABC):
    """Abstract interface for plan persistence."""

    @abstractmethod
    async def create(self, data: PlanCreate) -> Plan:
        """Create a new plan definition."""
        pass

    @abstractmethod
    async def get(self, plan_id: UUID | str) -> Optional[Plan]:
        """Get a plan by ID, active or not."""
        pass

    @abstractmethod
    async def find_active(self, plan_id: UUID | str) -> Optional[Plan]:
        """Get a plan by ID only if it is active."""
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def update(self, plan_id: UUID | str, update: PlanUpdate) -> Plan:
        """Update a plan definition. Raises NotFoundError if absent."""
        pass

    @abstractmethod
    async def delete(self, plan_id: UUID | str) -> bool:
        """Delete a plan definition."""
        pass
