"""
Tests for plan entry validation and PlanService.
"""

from datetime import datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import NotFoundError, ValidationError
from app.models.enums import DayOfWeek, MealSlot, PlanKind, PlanType
from app.models.plan import Plan, PlanCreate, PlanEntry, PlanUpdate
from app.services.plan_service import PlanService, validate_entries


class TestValidateEntries:
    def test_empty_plan(self):
        with pytest.raises(ValidationError):
            validate_entries(PlanType.DAILY, PlanKind.MEAL, [])

    def test_weekly_requires_day_of_week(self):
        with pytest.raises(ValidationError, match="day_of_week"):
            validate_entries(
                PlanType.WEEKLY,
                PlanKind.MEAL,
                [PlanEntry(item_ref="soup", subtype=MealSlot.LUNCH)],
            )

    @pytest.mark.parametrize("day_number", [None, 0, 31])
    def test_monthly_day_number_range(self, day_number):
        with pytest.raises(ValidationError, match="day_number"):
            validate_entries(
                PlanType.MONTHLY,
                PlanKind.TRAINING,
                [PlanEntry(item_ref="squat", day_number=day_number)],
            )

    def test_daily_rejects_day_discriminators(self):
        with pytest.raises(ValidationError):
            validate_entries(
                PlanType.DAILY,
                PlanKind.TRAINING,
                [PlanEntry(item_ref="run", day_of_week=DayOfWeek.MON)],
            )

    def test_meal_entries_need_slot(self):
        with pytest.raises(ValidationError, match="meal slot"):
            validate_entries(PlanType.DAILY, PlanKind.MEAL, [PlanEntry(item_ref="oats")])

    def test_training_entries_have_no_slot(self):
        with pytest.raises(ValidationError):
            validate_entries(
                PlanType.DAILY,
                PlanKind.TRAINING,
                [PlanEntry(item_ref="run", subtype=MealSlot.BREAKFAST)],
            )

    def test_valid_monthly_training_plan(self):
        validate_entries(
            PlanType.MONTHLY,
            PlanKind.TRAINING,
            [PlanEntry(item_ref="squat", day_number=1), PlanEntry(item_ref="bench", day_number=30)],
        )


class TestPlanEntryModel:
    def test_unknown_day_name(self):
        with pytest.raises(PydanticValidationError):
            PlanEntry(item_ref="run", day_of_week="funday")

    def test_time_must_be_hh_mm(self):
        with pytest.raises(PydanticValidationError):
            PlanEntry(item_ref="run", time="7am")

    def test_goals_are_stripped(self):
        plan = PlanCreate(name="Cut", type=PlanType.DAILY, goals=[" fat_loss ", "", "  "])
        assert plan.goals == ["fat_loss"]


def _plan(is_active: bool = True) -> Plan:
    return Plan(
        id=uuid4(),
        name="Daily breakfast",
        kind=PlanKind.MEAL,
        type=PlanType.DAILY,
        entries=[PlanEntry(item_ref="oats", subtype=MealSlot.BREAKFAST)],
        is_active=is_active,
        created_at=datetime(2025, 1, 1),
        updated_at=datetime(2025, 1, 1),
    )


@pytest.mark.asyncio
async def test_create_plan_validates_before_saving():
    repo = AsyncMock()
    service = PlanService(repo)

    with pytest.raises(ValidationError):
        await service.create_plan(PlanCreate(name="Empty", type=PlanType.DAILY))
    repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_plan_saves_valid_plan():
    repo = AsyncMock()
    repo.create.return_value = _plan()
    service = PlanService(repo)

    data = PlanCreate(
        name="Daily breakfast",
        type=PlanType.DAILY,
        entries=[PlanEntry(item_ref="oats", subtype=MealSlot.BREAKFAST)],
    )
    created = await service.create_plan(data)

    repo.create.assert_awaited_once_with(data)
    assert created.name == "Daily breakfast"


@pytest.mark.asyncio
async def test_update_plan_revalidates_on_type_change():
    repo = AsyncMock()
    repo.get.return_value = _plan()
    service = PlanService(repo)

    # Existing entries carry no day_of_week, so they cannot become weekly
    with pytest.raises(ValidationError):
        await service.update_plan(uuid4(), PlanUpdate(type=PlanType.WEEKLY))
    repo.update.assert_not_called()


@pytest.mark.asyncio
async def test_update_plan_name_only_skips_validation():
    repo = AsyncMock()
    current = _plan()
    repo.get.return_value = current
    repo.update.return_value = current
    service = PlanService(repo)

    await service.update_plan(current.id, PlanUpdate(name="Renamed"))
    repo.update.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_missing_plan():
    repo = AsyncMock()
    repo.get.return_value = None
    service = PlanService(repo)

    with pytest.raises(NotFoundError):
        await service.update_plan(uuid4(), PlanUpdate(name="x"))


@pytest.mark.asyncio
async def test_toggle_active_flips_flag():
    repo = AsyncMock()
    current = _plan(is_active=True)
    repo.get.return_value = current
    service = PlanService(repo)

    await service.toggle_active(current.id)

    update = repo.update.call_args.args[1]
    assert update.is_active is False
