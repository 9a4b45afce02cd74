"""
Shared fixtures: in-memory SQLite, repositories and an API client.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.api.deps import get_plan_repository, get_schedule_repository
from app.infrastructure.local.database import Base
from app.infrastructure.local.plan_repository import SqlitePlanRepository
from app.infrastructure.local.schedule_repository import SqliteScheduleRepository


@pytest.fixture
async def session_factory():
    """Session factory bound to a fresh in-memory database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def test_user_id():
    return "test_user"


@pytest.fixture
def plan_repo(session_factory):
    return SqlitePlanRepository(session_factory=session_factory)


@pytest.fixture
def schedule_repo(session_factory):
    return SqliteScheduleRepository(session_factory=session_factory)


@pytest.fixture
def auth_headers(test_user_id):
    return {"Authorization": f"Bearer {test_user_id}"}


@pytest.fixture
async def api_app(plan_repo, schedule_repo):
    """Application wired to the in-memory repositories."""
    from main import app

    app.dependency_overrides[get_plan_repository] = lambda: plan_repo
    app.dependency_overrides[get_schedule_repository] = lambda: schedule_repo
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(api_app):
    transport = ASGITransport(app=api_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
