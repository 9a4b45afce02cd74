"""
Schedule merging.

Reconciles expanded plan candidates with a user's persisted schedule.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import UUID

from app.core.logger import setup_logger
from app.interfaces.schedule_repository import IScheduleRepository
from app.models.schedule import ScheduleEntryInsert
from app.services.plan_expander import ExpandedEntry

logger = setup_logger(__name__)


@dataclass(frozen=True)
class MergeOutcome:
    inserted_count: int
    candidate_count: int
    deleted_range: Optional[tuple[date, date]] = None


class ScheduleMerger:
    """
    Applies candidates to a user's schedule.

    replace_existing=True clears every entry in the span, then inserts all
    candidates. Otherwise a candidate whose identity key already exists is
    skipped and existing entries are never touched. Candidates are expected
    to be free of in-batch identity collisions.
    """

    def __init__(self, schedule_repo: IScheduleRepository):
        self.schedule_repo = schedule_repo

    async def merge(
        self,
        user_id: str,
        candidates: list[ExpandedEntry],
        span: tuple[date, date],
        replace_existing: bool,
        plan_id: Optional[UUID] = None,
    ) -> MergeOutcome:
        span_start, span_end = span

        if replace_existing:
            entries = [self._to_insert(user_id, c, plan_id) for c in candidates]
            inserted = await self.schedule_repo.replace_in_range(
                user_id, span_start, span_end, entries
            )
            return MergeOutcome(
                inserted_count=inserted,
                candidate_count=len(candidates),
                deleted_range=(span_start, span_end),
            )

        to_insert: list[ScheduleEntryInsert] = []
        for candidate in candidates:
            existing = await self.schedule_repo.find_by_identity(
                user_id,
                candidate.entry.item_ref,
                candidate.date,
                candidate.entry.subtype,
            )
            if existing:
                logger.debug(
                    f"Skipping {candidate.entry.item_ref} on {candidate.date}: already scheduled"
                )
                continue
            to_insert.append(self._to_insert(user_id, candidate, plan_id))

        inserted = await self.schedule_repo.insert_many(to_insert) if to_insert else 0
        return MergeOutcome(inserted_count=inserted, candidate_count=len(candidates))

    @staticmethod
    def _to_insert(
        user_id: str, candidate: ExpandedEntry, plan_id: Optional[UUID]
    ) -> ScheduleEntryInsert:
        entry = candidate.entry
        return ScheduleEntryInsert(
            user_id=user_id,
            item_ref=entry.item_ref,
            subtype=entry.subtype,
            date=candidate.date,
            time=entry.time,
            order=entry.order,
            plan_id=plan_id,
        )
