"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base exception for the nabeatsu backend."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(AppError):
    """Referenced resource not found."""

    status_code = 404


class ValidationError(AppError):
    """Malformed or out-of-range input."""

    status_code = 400


class AuthenticationError(AppError):
    """The supplied identity does not resolve to a known user."""

    status_code = 401


class AuthorizationError(AppError):
    """Authorization failed."""

    status_code = 403


class ForbiddenError(AuthorizationError):
    """Forbidden operation (authorization denied)."""

    pass


class InfrastructureError(AppError):
    """Infrastructure-related error (DB, file system, etc.)."""

    pass
