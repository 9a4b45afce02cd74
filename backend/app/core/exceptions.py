"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class FitPlanError(Exception):
    """Base exception for the fitplan backend."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(FitPlanError):
    """Resource not found."""

    status_code = 404


class DuplicateError(FitPlanError):
    """Duplicate resource detected."""

    status_code = 409


class ValidationError(FitPlanError):
    """Invalid argument supplied by the caller."""

    status_code = 400


class AuthenticationError(FitPlanError):
    """Authentication failed."""

    status_code = 401


class InfrastructureError(FitPlanError):
    """Infrastructure-related error (DB, external services, etc.)."""

    status_code = 500
