"""
SQLite implementation of schedule repository.

Bulk inserts use INSERT ... ON CONFLICT DO NOTHING against the identity
unique constraint, so a row that already exists is never duplicated even
when two applications for the same user race each other.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import DuplicateError, InfrastructureError, ValidationError
from app.core.logger import setup_logger
from app.infrastructure.local.database import ScheduleEntryORM, get_session_factory
from app.interfaces.schedule_repository import IScheduleRepository
from app.models.enums import MealSlot, ScheduleStatus
from app.models.schedule import (
    ScheduleEntry,
    ScheduleEntryCreate,
    ScheduleEntryInsert,
    ScheduleEntryUpdate,
)

logger = setup_logger(__name__)


def _subtype_column(subtype: Optional[MealSlot | str]) -> str:
    if isinstance(subtype, MealSlot):
        return subtype.value
    return subtype or ""


class SqliteScheduleRepository(IScheduleRepository):
    """SQLite implementation of schedule repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ScheduleEntryORM) -> ScheduleEntry:
        """Convert ORM object to Pydantic model."""
        return ScheduleEntry(
            id=orm.id,
            user_id=orm.user_id,
            item_ref=orm.item_ref,
            subtype=orm.subtype or None,
            date=orm.date,
            time=orm.time,
            order=orm.order or 0,
            status=orm.status or ScheduleStatus.PENDING,
            note=orm.note,
            plan_id=orm.plan_id,
            created_at=orm.created_at,
        )

    def _to_row(self, entry: ScheduleEntryInsert) -> dict:
        return {
            "id": str(uuid4()),
            "user_id": entry.user_id,
            "item_ref": entry.item_ref,
            "subtype": _subtype_column(entry.subtype),
            "date": entry.date,
            "time": entry.time,
            "order": entry.order,
            "status": entry.status.value,
            "note": entry.note,
            "plan_id": str(entry.plan_id) if entry.plan_id else None,
            "created_at": datetime.utcnow(),
        }

    def _range_condition(self, user_id: str, start_date: date, end_date: date):
        return and_(
            ScheduleEntryORM.user_id == user_id,
            ScheduleEntryORM.date >= start_date,
            ScheduleEntryORM.date <= end_date,
        )

    async def _insert_rows(self, session, entries: list[ScheduleEntryInsert]) -> int:
        if not entries:
            return 0
        stmt = (
            sqlite_insert(ScheduleEntryORM)
            .values([self._to_row(entry) for entry in entries])
            .on_conflict_do_nothing()
        )
        result = await session.execute(stmt)
        return max(result.rowcount or 0, 0)

    async def find_in_range(
        self, user_id: str, start_date: date, end_date: date
    ) -> list[ScheduleEntry]:
        """List a user's entries in the inclusive range, ordered by date."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ScheduleEntryORM)
                .where(self._range_condition(user_id, start_date, end_date))
                .order_by(
                    ScheduleEntryORM.date,
                    ScheduleEntryORM.time,
                    ScheduleEntryORM.order,
                )
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def find_by_identity(
        self,
        user_id: str,
        item_ref: str,
        entry_date: date,
        subtype: Optional[MealSlot],
    ) -> Optional[ScheduleEntry]:
        """Find the entry holding the given identity key."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ScheduleEntryORM).where(
                    and_(
                        ScheduleEntryORM.user_id == user_id,
                        ScheduleEntryORM.item_ref == item_ref,
                        ScheduleEntryORM.date == entry_date,
                        ScheduleEntryORM.subtype == _subtype_column(subtype),
                    )
                )
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def delete_in_range(self, user_id: str, start_date: date, end_date: date) -> int:
        """Delete a user's entries in the inclusive range."""
        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    delete(ScheduleEntryORM).where(
                        self._range_condition(user_id, start_date, end_date)
                    )
                )
                await session.commit()
            except SQLAlchemyError as e:
                raise InfrastructureError("Failed to delete schedule entries") from e
            return result.rowcount or 0

    async def insert_many(self, entries: list[ScheduleEntryInsert]) -> int:
        """Insert entries, skipping identity collisions."""
        async with self._session_factory() as session:
            try:
                inserted = await self._insert_rows(session, entries)
                await session.commit()
            except SQLAlchemyError as e:
                raise InfrastructureError("Failed to insert schedule entries") from e
            if inserted < len(entries):
                logger.info(
                    f"Ignored {len(entries) - inserted} schedule entries that already existed"
                )
            return inserted

    async def replace_in_range(
        self,
        user_id: str,
        start_date: date,
        end_date: date,
        entries: list[ScheduleEntryInsert],
    ) -> int:
        """Clear the range and insert entries in one transaction."""
        async with self._session_factory() as session:
            try:
                await session.execute(
                    delete(ScheduleEntryORM).where(
                        self._range_condition(user_id, start_date, end_date)
                    )
                )
                inserted = await self._insert_rows(session, entries)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise InfrastructureError("Failed to replace schedule entries") from e
            return inserted

    async def create(self, user_id: str, data: ScheduleEntryCreate) -> ScheduleEntry:
        """Add a single entry to the user's schedule."""
        async with self._session_factory() as session:
            orm = ScheduleEntryORM(
                id=str(uuid4()),
                user_id=user_id,
                item_ref=data.item_ref,
                subtype=_subtype_column(data.subtype),
                date=data.date,
                time=data.time,
                order=data.order,
                status=data.status.value,
                note=data.note,
            )
            session.add(orm)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateError(
                    f"{data.item_ref} is already scheduled on {data.date.isoformat()}"
                ) from e
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, user_id: str, entry_id: UUID) -> Optional[ScheduleEntry]:
        """Get one of the user's entries by ID."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ScheduleEntryORM).where(
                    and_(
                        ScheduleEntryORM.id == str(entry_id),
                        ScheduleEntryORM.user_id == user_id,
                    )
                )
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def update(
        self, user_id: str, entry_id: UUID, update: ScheduleEntryUpdate
    ) -> Optional[ScheduleEntry]:
        """Change status or note of one of the user's entries."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(ScheduleEntryORM).where(
                    and_(
                        ScheduleEntryORM.id == str(entry_id),
                        ScheduleEntryORM.user_id == user_id,
                    )
                )
            )
            orm = result.scalar_one_or_none()
            if not orm:
                return None

            update_data = update.model_dump(exclude_unset=True, mode="json")
            if update_data.get("status", ScheduleStatus.PENDING.value) is None:
                raise ValidationError("status cannot be null")
            for field, value in update_data.items():
                setattr(orm, field, value)

            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, user_id: str, entry_id: UUID) -> bool:
        """Delete one of the user's entries by ID."""
        async with self._session_factory() as session:
            result = await session.execute(
                delete(ScheduleEntryORM).where(
                    and_(
                        ScheduleEntryORM.id == str(entry_id),
                        ScheduleEntryORM.user_id == user_id,
                    )
                )
            )
            await session.commit()
            return (result.rowcount or 0) > 0

    async def delete_by_date(self, user_id: str, entry_date: date) -> int:
        """Delete all of the user's entries on a date."""
        return await self.delete_in_range(user_id, entry_date, entry_date)
