"""
Authentication module.

Handles principals (accounts and users), password hashing, login
sessions, JWT issuance and verification, and ownership checks.

Public API:
- IAuthService: Interface for auth operations
- TokenIssuer / TokenSigner: Concurrent three-token issuance
- authorize_create / authorize_update / authorize_delete: Ownership predicates
- Auth exceptions: InvalidCredentialsError, OwnershipError, etc.
"""

from .authorization import (
    Decision,
    authorize_create,
    authorize_delete,
    authorize_update,
    ensure_allowed,
)
from .exceptions import (
    CredentialMismatchError,
    ExpiredTokenError,
    HashError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    OwnershipError,
    PrincipalNotFoundError,
    RegistrationValidationError,
    SigningError,
    UnknownPrincipalError,
    UsernameTakenError,
)
from .interfaces import IAuthService
from .models import (
    Account,
    PrincipalKind,
    SessionActivity,
    TokenBundle,
    TokenType,
    User,
)
from .tokens import TokenIssuer, TokenSigner

__all__ = [
    # Interface
    "IAuthService",
    # Tokens
    "TokenIssuer",
    "TokenSigner",
    # Authorization
    "Decision",
    "authorize_create",
    "authorize_update",
    "authorize_delete",
    "ensure_allowed",
    # Models
    "Account",
    "User",
    "PrincipalKind",
    "SessionActivity",
    "TokenBundle",
    "TokenType",
    # Exceptions
    "InvalidCredentialsError",
    "UnknownPrincipalError",
    "CredentialMismatchError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "PrincipalNotFoundError",
    "UsernameTakenError",
    "RegistrationValidationError",
    "OwnershipError",
    "HashError",
    "SigningError",
]
