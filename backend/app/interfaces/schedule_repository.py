"""
Schedule repository interface.

Defines contract for per-user schedule entry persistence.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from app.models.enums import MealSlot
from app.models.schedule import (
    ScheduleEntry,
    ScheduleEntryCreate,
    ScheduleEntryInsert,
    ScheduleEntryUpdate,
)


class IScheduleRepository(ABC):
    """Abstract interface for schedule entry persistence."""

    @abstractmethod
    async def find_in_range(
        self, user_id: str, start_date: date, end_date: date
    ) -> list[ScheduleEntry]:
        """List a user's entries with start_date <= date <= end_date."""
        pass

    @abstractmethod
    async def find_by_identity(
        self,
        user_id: str,
        item_ref: str,
        entry_date: date,
        subtype: Optional[MealSlot],
    ) -> Optional[ScheduleEntry]:
        """Find the entry holding the given identity key, if any."""
        pass

    @abstractmethod
    async def delete_in_range(self, user_id: str, start_date: date, end_date: date) -> int:
        """Delete a user's entries in the inclusive range. Returns deleted count."""
        pass

    @abstractmethod
    async def insert_many(self, entries: list[ScheduleEntryInsert]) -> int:
        """
        Insert entries, ignoring any whose identity key already exists.

        Returns:
            Number of rows actually written
        """
        pass

    async def replace_in_range(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
        entries: list[ScheduleEntryInsert],
    ) -> int:
        """
        Clear the range and insert entries.

        Implementations backed by a transactional store should override this
        to run both steps atomically.
        """
        await self.delete_in_range(user_id, start_date, end_date)
        return await self.insert_many(entries)

    @abstractmethod
    async def create(self, user_id: str, data: ScheduleEntryCreate) -> ScheduleEntry:
        """Add a single entry. Raises DuplicateError on identity collision."""
        pass

    @abstractmethod
    async def get(self, user_id: str, entry_id: UUID) -> Optional[ScheduleEntry]:
        """Get one of the user's entries by ID."""
        pass

    @abstractmethod
    async def update(
        self, user_id: str, entry_id: UUID, update: ScheduleEntryUpdate
    ) -> Optional[ScheduleEntry]:
        """Change status or note of one of the user's entries. None if absent."""
        pass

    @abstractmethod
    async def delete(self, user_id: str, entry_id: UUID) -> bool:
        """Delete one of the user's entries by ID."""
        pass

    @abstractmethod
    async def delete_by_date(self, user_id: str, entry_date: date) -> int:
        """Delete all of the user's entries on a date. Returns deleted count."""
        pass
