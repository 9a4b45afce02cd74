"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class PlanORM(Base):
    """Plan definition ORM model (meal and training plans)."""

    __tablename__ = "plans"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    kind = Column(String(20), nullable=False, default="meal", index=True)
    type = Column(String(20), nullable=False, index=True)
    goals = Column(JSON, nullable=True, default=list)
    level = Column(String(50), nullable=True, index=True)
    entries = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class ScheduleEntryORM(Base):
    """Schedule entry ORM model."""

    __tablename__ = "schedule_entries"
    __table_args__ = (
        # Identity key. subtype is stored as "" when absent because SQLite
        # treats NULLs as distinct in unique constraints.
        UniqueConstraint(
            "user_id", "item_ref", "date", "subtype", name="uq_schedule_entry_identity"
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    item_ref = Column(String(100), nullable=False)
    subtype = Column(String(20), nullable=False, default="")
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=True)
    order = Column(Integer, default=0)
    status = Column(String(20), nullable=False, default="pending")
    note = Column(Text, nullable=True)
    plan_id = Column(String(36), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)


# ===========================================
# Database Session Management
# ===========================================


def get_engine():
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=False)


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db():
    """Initialize database tables."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
