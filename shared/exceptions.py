"""
Base exception classes for the mygram account service.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base class to one HTTP status code.
"""

from typing import Optional, Any


class MygramError(Exception):
    """
    Base exception for all mygram errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(MygramError):
    """Resource not found."""

    pass


class ValidationError(MygramError):
    """Input validation failed."""

    pass


class AuthenticationError(MygramError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(MygramError):
    """Authorization failed (acting principal may not touch the record)."""

    pass


class ConflictError(MygramError):
    """The write collides with existing data (e.g. a unique column)."""

    pass


class InfrastructureError(MygramError):
    """
    A backing component failed.

    The message is logged but never shown to clients.
    """

    def __init__(
        self,
        message: str,
        component: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.component = component
        self.details["component"] = component


class StorageError(InfrastructureError):
    """The database rejected or failed a read or write."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, component="storage", code="STORAGE_ERROR", details=details)
