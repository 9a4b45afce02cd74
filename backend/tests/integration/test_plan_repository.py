"""
Integration tests for the SQLite plan repository.
"""

from uuid import uuid4

import pytest

from app.core.exceptions import NotFoundError, ValidationError
from app.models.enums import DayOfWeek, MealSlot, PlanKind, PlanType
from app.models.plan import PlanCreate, PlanEntry, PlanUpdate


def _weekly_plan(**overrides) -> PlanCreate:
    data = dict(
        name="Weekly meals",
        kind=PlanKind.MEAL,
        type=PlanType.WEEKLY,
        goals=["fat_loss"],
        level="beginner",
        entries=[
            PlanEntry(item_ref="soup", subtype=MealSlot.LUNCH, day_of_week=DayOfWeek.WED, time="12:30"),
        ],
    )
    data.update(overrides)
    return PlanCreate(**data)


@pytest.mark.asyncio
async def test_create_and_get(plan_repo):
    created = await plan_repo.create(_weekly_plan())

    fetched = await plan_repo.get(created.id)
    assert fetched is not None
    assert fetched.type == PlanType.WEEKLY
    assert fetched.goals == ["fat_loss"]
    assert fetched.entries[0].day_of_week == DayOfWeek.WED
    assert fetched.entries[0].subtype == MealSlot.LUNCH
    assert fetched.entries[0].time == "12:30"


@pytest.mark.asyncio
async def test_get_accepts_string_id(plan_repo):
    created = await plan_repo.create(_weekly_plan())
    assert (await plan_repo.get(str(created.id))).id == created.id


@pytest.mark.asyncio
async def test_find_active_ignores_inactive(plan_repo):
    created = await plan_repo.create(_weekly_plan(is_active=False))

    assert await plan_repo.get(created.id) is not None
    assert await plan_repo.find_active(created.id) is None
    assert await plan_repo.find_active(uuid4()) is None


@pytest.mark.asyncio
async def test_list_filters(plan_repo):
    await plan_repo.create(_weekly_plan(name="A"))
    await plan_repo.create(_weekly_plan(name="B", goals=["muscle_gain"], level="advanced"))
    await plan_repo.create(_weekly_plan(name="C", is_active=False))
    await plan_repo.create(
        PlanCreate(
            name="D",
            kind=PlanKind.TRAINING,
            type=PlanType.MONTHLY,
            entries=[PlanEntry(item_ref="squat", day_number=1)],
        )
    )

    assert {p.name for p in await plan_repo.list()} == {"A", "B", "D"}
    assert {p.name for p in await plan_repo.list(include_inactive=True)} == {"A", "B", "C", "D"}
    assert [p.name for p in await plan_repo.list(kind=PlanKind.TRAINING)] == ["D"]
    assert [p.name for p in await plan_repo.list(goal="muscle_gain")] == ["B"]
    assert [p.name for p in await plan_repo.list(level="advanced")] == ["B"]
    assert len(await plan_repo.list(limit=2)) == 2


@pytest.mark.asyncio
async def test_update(plan_repo):
    created = await plan_repo.create(_weekly_plan())

    updated = await plan_repo.update(
        created.id,
        PlanUpdate(
            name="Renamed",
            is_active=False,
            entries=[PlanEntry(item_ref="stew", subtype=MealSlot.DINNER, day_of_week=DayOfWeek.FRI)],
        ),
    )

    assert updated.name == "Renamed"
    assert updated.is_active is False
    assert [e.item_ref for e in updated.entries] == ["stew"]
    assert updated.updated_at >= created.updated_at


@pytest.mark.asyncio
async def test_update_missing(plan_repo):
    with pytest.raises(NotFoundError):
        await plan_repo.update(uuid4(), PlanUpdate(name="x"))


@pytest.mark.asyncio
async def test_delete(plan_repo):
    created = await plan_repo.create(_weekly_plan())

    assert await plan_repo.delete(created.id) is True
    assert await plan_repo.get(created.id) is None
    assert await plan_repo.delete(created.id) is False


@pytest.mark.asyncio
async def test_update_clears_optional_fields(plan_repo):
    created = await plan_repo.create(_weekly_plan(description="Soups all week"))

    updated = await plan_repo.update(created.id, PlanUpdate(description=None, level=None))

    assert updated.description is None
    assert updated.level is None
    assert updated.name == created.name


@pytest.mark.asyncio
async def test_update_strips_goals(plan_repo):
    created = await plan_repo.create(_weekly_plan())

    updated = await plan_repo.update(created.id, PlanUpdate(goals=[" muscle_gain ", "", "  "]))

    assert updated.goals == ["muscle_gain"]


@pytest.mark.asyncio
async def test_update_rejects_null_required_field(plan_repo):
    created = await plan_repo.create(_weekly_plan())

    with pytest.raises(ValidationError):
        await plan_repo.update(created.id, PlanUpdate(name=None))
    assert (await plan_repo.get(created.id)).name == "Weekly meals"
