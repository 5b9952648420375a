"""
Authentication service implementation.

Orchestrates login (lookup, password check, activity record, token
issuance) and registration (field validation, hashing, persistence)
for both principal kinds.
"""

import asyncio
import logging
import uuid
from enum import Enum

from pydantic import EmailStr, TypeAdapter, ValidationError as PydanticValidationError

from shared.exceptions import MygramError
from shared.models import AuthenticatedPrincipal

from .exceptions import (
    InvalidTokenError,
    PrincipalNotFoundError,
    RegistrationValidationError,
    UnknownPrincipalError,
    UsernameTakenError,
)
from .hashing import DEFAULT_ROUNDS, MAX_PASSWORD_BYTES, hash_password, verify_password
from .interfaces import IActivityRepository, IAuthService, IPrincipalRepository
from .models import (
    AccessClaim,
    AccountResponse,
    CreateAccountRequest,
    LoginRequest,
    PrincipalKind,
    RegisterUserRequest,
    TokenBundle,
    TokenType,
    User,
    UserResponse,
)
from .tokens import TokenIssuer, TokenSigner

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MIN_AGE_EXCLUSIVE = 8

_email_adapter = TypeAdapter(EmailStr)


class LoginStage(str, Enum):
    LOOKUP = "lookup"
    VERIFY = "verify"
    RECORD_ACTIVITY = "record_activity"
    ISSUE_TOKENS = "issue_tokens"


def ensure_password_fits(password: str) -> None:
    """Reject passwords bcrypt would truncate."""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise RegistrationValidationError(
            f"password exceeds {MAX_PASSWORD_BYTES} bytes", fields=["password"]
        )


def validate_registration(request: RegisterUserRequest) -> tuple[str, int]:
    """
    Check registration fields before anything is written.

    Returns:
        (normalized email, age as int)

    Raises:
        RegistrationValidationError: On the first failing rule.
    """
    empty = [
        name
        for name in ("email", "username", "password", "age")
        if not getattr(request, name)
    ]
    if empty:
        raise RegistrationValidationError(f"empty fields: {', '.join(empty)}", fields=empty)

    if len(request.password) < MIN_PASSWORD_LENGTH:
        raise RegistrationValidationError("password length insufficient", fields=["password"])
    ensure_password_fits(request.password)

    try:
        age = int(request.age)
    except ValueError:
        raise RegistrationValidationError("age conversion failed", fields=["age"])
    if age <= MIN_AGE_EXCLUSIVE:
        raise RegistrationValidationError("age insufficient", fields=["age"])

    try:
        email = _email_adapter.validate_python(request.email)
    except PydanticValidationError:
        raise RegistrationValidationError(f"invalid email {request.email}", fields=["email"])

    return email, age


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Repositories are injected so the same service drives both the
    account and the user principal tables.
    """

    def __init__(
        self,
        accounts: IPrincipalRepository,
        users: IPrincipalRepository,
        activities: IActivityRepository,
        signer: TokenSigner,
        issuer: TokenIssuer,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ):
        self._principals = {
            PrincipalKind.ACCOUNT: accounts,
            PrincipalKind.USER: users,
        }
        self._activities = activities
        self._signer = signer
        self._issuer = issuer
        self._bcrypt_rounds = bcrypt_rounds

    async def login(self, kind: PrincipalKind, request: LoginRequest) -> TokenBundle:
        """
        Log a principal in.

        Stages run in order and stop at the first failure; no activity is
        recorded unless the password matched, and no tokens are issued
        unless the activity was recorded.
        """
        stage = LoginStage.LOOKUP
        try:
            principal = self._principals[kind].get_by_username(request.username)
            if principal is None:
                raise UnknownPrincipalError()

            stage = LoginStage.VERIFY
            await asyncio.to_thread(verify_password, principal.password, request.password)

            stage = LoginStage.RECORD_ACTIVITY
            activity = self._activities.record_login(str(principal.id), kind)

            stage = LoginStage.ISSUE_TOKENS
            tokens = await self._issuer.issue_all(
                principal_id=str(principal.id),
                username=principal.username,
                role=principal.role.value,
                jti=str(activity.id),
                kind=kind,
            )
        except MygramError as e:
            logger.warning(
                "Login failed at %s for %s '%s': %s",
                stage.value,
                kind.value,
                request.username,
                type(e).__name__,
            )
            raise

        logger.info("Issued tokens for %s %s (jti=%s)", kind.value, principal.id, activity.id)
        return tokens

    async def register_user(self, request: RegisterUserRequest) -> UserResponse:
        """Register a user-variant principal."""
        email, age = validate_registration(request)

        hashed = await asyncio.to_thread(hash_password, request.password, self._bcrypt_rounds)

        users = self._principals[PrincipalKind.USER]
        if users.get_by_username(request.username) is not None:
            raise UsernameTakenError(request.username)

        user = users.create(
            {
                "username": request.username,
                "email": email,
                "password": hashed,
                "age": age,
            }
        )
        logger.info("Registered user %s", user.id)
        return UserResponse(**user.model_dump(exclude={"password"}))

    async def create_account(self, request: CreateAccountRequest) -> AccountResponse:
        """Create an account-variant principal."""
        ensure_password_fits(request.password)
        hashed = await asyncio.to_thread(hash_password, request.password, self._bcrypt_rounds)

        accounts = self._principals[PrincipalKind.ACCOUNT]
        if accounts.get_by_username(request.username) is not None:
            raise UsernameTakenError(request.username)

        account = accounts.create(
            {
                "id": str(uuid.uuid4()),
                "username": request.username,
                "password": hashed,
                "role": request.role.value,
            }
        )
        logger.info("Created %s account %s", account.role.value, account.id)
        return AccountResponse(**account.model_dump(exclude={"password", "updated_at"}))

    async def get_account(self, account_id: str) -> AccountResponse:
        account = self._principals[PrincipalKind.ACCOUNT].get_by_id(account_id)
        if account is None:
            raise PrincipalNotFoundError(PrincipalKind.ACCOUNT.value, account_id)
        return AccountResponse(**account.model_dump(exclude={"password", "updated_at"}))

    async def get_user(self, user_id: str) -> User:
        user = self._principals[PrincipalKind.USER].get_by_id(user_id)
        if user is None:
            raise PrincipalNotFoundError(PrincipalKind.USER.value, user_id)
        return user

    async def validate_access_token(self, token: str) -> AuthenticatedPrincipal:
        """
        Verify an access token and return its bearer.

        Identity and refresh tokens are rejected here even though they
        carry a valid signature.
        """
        payload = self._signer.decode(token, expected_type=TokenType.ACCESS)

        try:
            claim = AccessClaim.model_validate(payload)
        except PydanticValidationError as e:
            raise InvalidTokenError(f"Malformed access claim: {e.error_count()} errors")

        return AuthenticatedPrincipal(
            principal_id=claim.user_id,
            kind=claim.kind.value,
            role=claim.role,
            session_id=claim.jti,
        )
