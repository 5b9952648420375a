"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """
    Login failed.

    Both subclasses render with the same public message so that a caller
    cannot tell an unknown username from a wrong password.
    """

    PUBLIC_MESSAGE = "Invalid username or password"

    def __init__(self, reason: str):
        super().__init__(self.PUBLIC_MESSAGE, code="INVALID_CREDENTIALS")
        self.reason = reason


class UnknownPrincipalError(InvalidCredentialsError):
    """Raised when no principal has the submitted username."""

    def __init__(self):
        super().__init__(reason="unknown_principal")


class CredentialMismatchError(InvalidCredentialsError):
    """Raised when the submitted password does not match the stored hash."""

    def __init__(self):
        super().__init__(reason="credential_mismatch")


class PrincipalNotFoundError(NotFoundError):
    """Raised when a principal looked up by id doesn't exist."""

    def __init__(self, kind: str, principal_id: str):
        super().__init__(
            f"{kind.capitalize()} not found: {principal_id}",
            code="PRINCIPAL_NOT_FOUND",
            details={"kind": kind, "principal_id": principal_id},
        )


class UsernameTakenError(ConflictError):
    """Raised when registering a username that already exists."""

    def __init__(self, username: str):
        super().__init__(
            f"Username already taken: {username}",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class RegistrationValidationError(ValidationError):
    """Raised when registration fields fail validation."""

    def __init__(self, message: str, fields: Optional[list[str]] = None):
        super().__init__(
            message,
            code="INVALID_REGISTRATION",
            details={"fields": fields or []},
        )


class OwnershipError(AuthorizationError):
    """Raised when the acting principal does not own the record it touches."""

    def __init__(self, reason: str, action: str):
        super().__init__(
            reason,
            code="UNAUTHORIZED",
            details={"action": action},
        )


class HashError(InfrastructureError):
    """Raised when the password hash cannot be produced."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message, component="hasher", code="HASH_ERROR")


class SigningError(InfrastructureError):
    """Raised when a token cannot be signed."""

    def __init__(self, message: str = "Token signing failed", token_type: Optional[str] = None):
        details = {"token_type": token_type} if token_type else None
        super().__init__(message, component="signer", code="SIGNING_ERROR", details=details)
