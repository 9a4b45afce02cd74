"""
Authentication provider interface.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class User(BaseModel):
    """Authenticated user identity."""

    id: str
    email: str | None = None
    display_name: str | None = None


class IAuthProvider(ABC):
    """Abstract interface for token verification."""

    @abstractmethod
    async def verify_token(self, token: str) -> User:
        """Verify a bearer token and return the user it identifies."""
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """Check if authentication is enabled."""
        pass
