"""
Mock authentication provider for local development.
"""

from app.core.exceptions import AuthenticationError
from app.interfaces.auth_provider import IAuthProvider, User


class MockAuthProvider(IAuthProvider):
    """Accepts any non-empty bearer token and uses it as the user id."""

    def __init__(self, enabled: bool = False):
        self._enabled = enabled

    async def verify_token(self, token: str) -> User:
        if not token:
            raise AuthenticationError("Empty bearer token")
        return User(id=token)

    def is_enabled(self) -> bool:
        return self._enabled
