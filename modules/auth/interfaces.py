"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with mocks and lets the two
principal tables share one lookup/create contract.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedPrincipal

from .models import (
    AccountResponse,
    CreateAccountRequest,
    LoginRequest,
    Principal,
    PrincipalKind,
    RegisterUserRequest,
    SessionActivity,
    TokenBundle,
    User,
    UserResponse,
)


@runtime_checkable
class IPrincipalRepository(Protocol):
    """Lookup/create capability shared by the account and user tables."""

    kind: PrincipalKind

    def get_by_username(self, username: str) -> Optional[Principal]:
        """Return the principal with this username, or None."""
        ...

    def get_by_id(self, principal_id: str) -> Optional[Principal]:
        """Return the principal with this id, or None."""
        ...

    def create(self, data: dict[str, Any]) -> Principal:
        """Persist a new principal and return it with its stored fields."""
        ...


@runtime_checkable
class IActivityRepository(Protocol):
    """Records login activities."""

    def record_login(
        self,
        principal_id: str,
        kind: PrincipalKind = PrincipalKind.USER,
    ) -> SessionActivity:
        """
        Persist a LOGIN activity for a principal.

        Raises:
            StorageError: If the row cannot be written.
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer and to other modules.
    """

    async def login(self, kind: PrincipalKind, request: LoginRequest) -> TokenBundle:
        """
        Verify credentials, record the login and issue the token bundle.

        Raises:
            InvalidCredentialsError: Unknown username or wrong password
            StorageError: If the login activity cannot be recorded
            SigningError: If any token cannot be signed
        """
        ...

    async def register_user(self, request: RegisterUserRequest) -> UserResponse:
        """
        Validate, hash and persist a new user.

        Raises:
            RegistrationValidationError: If a field is missing or invalid
            UsernameTakenError: If the username exists
        """
        ...

    async def create_account(self, request: CreateAccountRequest) -> AccountResponse:
        """
        Hash and persist a new account.

        Raises:
            RegistrationValidationError: If the password is too long to hash
            UsernameTakenError: If the username exists
        """
        ...

    async def get_account(self, account_id: str) -> AccountResponse:
        """
        Get an account's profile.

        Raises:
            PrincipalNotFoundError: If the account doesn't exist
        """
        ...

    async def get_user(self, user_id: str) -> User:
        """
        Get a user by id.

        Raises:
            PrincipalNotFoundError: If the user doesn't exist
        """
        ...

    async def validate_access_token(self, token: str) -> AuthenticatedPrincipal:
        """
        Verify an access token and return its bearer.

        Raises:
            AuthenticationError: If token is missing, invalid or expired
        """
        ...
