"""
Application error taxonomy.

Services raise these; the app factory maps them to HTTP responses.
"""
from typing import Any, Optional


class EcoTrackError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str, details: Optional[list[Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class InputError(EcoTrackError):
    """Raised when a caller supplies missing or invalid input."""
    pass


class AuthenticationError(EcoTrackError):
    """Raised when credentials or tokens are missing, wrong or expired."""
    pass


class AuthorizationError(EcoTrackError):
    """Raised when a token is present but not acceptable."""
    pass


class NotFoundError(EcoTrackError):
    """Raised when a requested record does not exist for the caller."""
    pass


class ConflictError(EcoTrackError):
    """Raised when a record would violate a uniqueness rule."""
    pass


class StorageError(EcoTrackError):
    """Raised when the storage layer fails."""
    pass


class ExternalServiceError(EcoTrackError):
    """Raised when a third-party service call fails or returns garbage."""
    pass
