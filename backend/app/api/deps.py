"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that inject the correct
infrastructure implementations based on environment configuration.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from app.core.config import get_settings
from app.core.exceptions import AuthenticationError
from app.interfaces.auth_provider import IAuthProvider, User
from app.interfaces.plan_repository import IPlanRepository
from app.interfaces.schedule_repository import IScheduleRepository


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_plan_repository() -> IPlanRepository:
    """Get plan repository instance."""
    settings = get_settings()
    if settings.is_gcp:
        raise NotImplementedError("Firestore not implemented yet")
    else:
        from app.infrastructure.local.plan_repository import SqlitePlanRepository
        return SqlitePlanRepository()


@lru_cache()
def get_schedule_repository() -> IScheduleRepository:
    """Get schedule repository instance."""
    settings = get_settings()
    if settings.is_gcp:
        raise NotImplementedError("Firestore not implemented yet")
    else:
        from app.infrastructure.local.schedule_repository import SqliteScheduleRepository
        return SqliteScheduleRepository()


@lru_cache()
def get_auth_provider() -> IAuthProvider:
    """Get auth provider instance."""
    settings = get_settings()
    from app.infrastructure.local.mock_auth import MockAuthProvider
    return MockAuthProvider(enabled=settings.AUTH_PROVIDER == "mock")


# ===========================================
# User Authentication
# ===========================================


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
) -> User:
    """
    Get current authenticated user.

    When authentication is disabled, returns the development user.
    """
    if not auth_provider.is_enabled():
        return User(id="dev_user", email="dev@example.com", display_name="Developer")

    if not authorization:
        raise AuthenticationError("Authorization header required")

    # Extract token from "Bearer <token>"
    try:
        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            raise ValueError("Invalid scheme")
    except ValueError:
        raise AuthenticationError("Invalid authorization header format")

    return await auth_provider.verify_token(token)


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

PlanRepo = Annotated[IPlanRepository, Depends(get_plan_repository)]
ScheduleRepo = Annotated[IScheduleRepository, Depends(get_schedule_repository)]
CurrentUser = Annotated[User, Depends(get_current_user)]
