"""
Authentication module data models.

These models define the principals, session activities, token claims
and request/response payloads used by the auth module and exposed to
other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class PrincipalKind(str, Enum):
    """Which principal table a login or lookup targets."""

    ACCOUNT = "account"
    USER = "user"


class AccountRole(str, Enum):
    ADMIN = "admin"
    NORMAL = "normal"


class ActivityType(str, Enum):
    LOGIN = "LOGIN"


class TokenType(str, Enum):
    ID = "ID_TOKEN"
    ACCESS = "ACCESS_TOKEN"
    REFRESH = "REFRESH_TOKEN"


# -----------------------------------------------------------------------------
# Principals
# -----------------------------------------------------------------------------


class Account(BaseModel):
    """Account-variant principal (UUID id, carries a role)."""

    id: UUID
    username: str
    password: str = Field(..., repr=False, description="bcrypt hash")
    role: AccountRole = AccountRole.NORMAL
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class User(BaseModel):
    """User-variant principal (integer id, owns photos/comments/social media)."""

    id: int
    username: str
    email: str
    password: str = Field(..., repr=False, description="bcrypt hash")
    age: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def role(self) -> AccountRole:
        """Users always act with the normal role."""
        return AccountRole.NORMAL


Principal = Union[Account, User]


class SessionActivity(BaseModel):
    """One recorded login. Its id is the JTI of every token of that login."""

    id: UUID
    user_id: str
    type: ActivityType = ActivityType.LOGIN
    created_at: Optional[datetime] = None


# -----------------------------------------------------------------------------
# Token claims
# -----------------------------------------------------------------------------


class BaseClaim(BaseModel):
    """
    Claims shared by all three tokens of a login.

    Frozen: variants are derived with model_copy(update=...), never by
    mutating an instance another task may be reading.
    """

    exp: int = Field(..., description="Expiration (epoch seconds)")
    nbf: int = Field(..., description="Not before (epoch seconds)")
    iat: int = Field(..., description="Issued at (epoch seconds)")
    iss: str = Field(..., description="Issuer")
    aud: str = Field(..., description="Audience")
    jti: str = Field(..., description="Session activity id")
    type: TokenType = TokenType.ID

    model_config = {"frozen": True}


class IdentityClaim(BaseClaim):
    username: str
    role: str


class AccessClaim(BaseClaim):
    role: str
    user_id: str
    kind: PrincipalKind = Field(..., description="Principal table the user_id belongs to")


class RefreshClaim(BaseClaim):
    pass


class TokenBundle(BaseModel):
    """The three signed tokens returned by a successful login."""

    id_token: str
    access_token: str
    refresh_token: str


# -----------------------------------------------------------------------------
# Requests / responses
# -----------------------------------------------------------------------------


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class CreateAccountRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    role: AccountRole


class RegisterUserRequest(BaseModel):
    """
    User registration payload.

    Fields are plain strings with empty defaults so that the service can
    report every missing field in one message.
    """

    username: str = ""
    email: str = ""
    password: str = ""
    age: str = ""

    @field_validator("age", mode="before")
    @classmethod
    def age_as_text(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class AccountResponse(BaseModel):
    id: UUID
    username: str
    role: AccountRole
    created_at: Optional[datetime] = None


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    age: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
