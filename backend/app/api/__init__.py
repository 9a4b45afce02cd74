"""API routers."""

from app.api import (
    plans,
    schedule,
)

__all__ = [
    "plans",
    "schedule",
]
