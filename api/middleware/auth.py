"""
Bearer token authentication dependencies.

Validates access tokens issued at login and resolves the acting
principal. Identity and refresh tokens are rejected, and so are access
tokens issued to the other principal kind.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_auth_service
from modules.auth.exceptions import (
    InvalidTokenError,
    MissingTokenError,
    PrincipalNotFoundError,
)
from modules.auth.interfaces import IAuthService
from modules.auth.models import PrincipalKind, User
from shared.models import AuthenticatedPrincipal

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedPrincipal:
    """
    Dependency that requires a valid access token of either kind.

    Usage:
        @router.get("/protected")
        async def protected_route(
            principal: AuthenticatedPrincipal = Depends(get_current_principal),
        ):
            return {"id": principal.principal_id}
    """
    if credentials is None:
        raise MissingTokenError("Missing authorization header")

    return await auth.validate_access_token(credentials.credentials)


def _require_kind(principal: AuthenticatedPrincipal, kind: PrincipalKind) -> None:
    if principal.kind != kind.value:
        raise InvalidTokenError(f"Access token was not issued to a {kind.value}")


async def get_current_account(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
) -> AuthenticatedPrincipal:
    """Dependency that requires an access token issued at account login."""
    _require_kind(principal, PrincipalKind.ACCOUNT)
    return principal


async def get_current_user(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    auth: IAuthService = Depends(get_auth_service),
) -> User:
    """
    Dependency that resolves the token bearer to a stored user.

    A token whose user no longer exists is treated as invalid.
    """
    _require_kind(principal, PrincipalKind.USER)
    try:
        return await auth.get_user(principal.principal_id)
    except PrincipalNotFoundError:
        raise InvalidTokenError("Token bearer no longer exists")
