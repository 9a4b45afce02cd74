"""Abstract interfaces for infrastructure abstraction."""

from app.interfaces.auth_provider import IAuthProvider
from app.interfaces.plan_repository import IPlanRepository
from app.interfaces.schedule_repository import IScheduleRepository

__all__ = [
    "IAuthProvider",
    "IPlanRepository",
    "IScheduleRepository",
]
