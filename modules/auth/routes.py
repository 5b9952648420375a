"""
Account and user API endpoints.

Registration and login for both principal kinds, plus the profile of
the access token's bearer.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_account, get_current_user
from api.models import SuccessResponse
from shared.models import AuthenticatedPrincipal

from .interfaces import IAuthService
from .models import (
    CreateAccountRequest,
    LoginRequest,
    PrincipalKind,
    RegisterUserRequest,
    User,
    UserResponse,
)

account_router = APIRouter()
user_router = APIRouter()


@account_router.post("", response_model=SuccessResponse, status_code=202)
async def create_account(
    request: CreateAccountRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SuccessResponse:
    account = await service.create_account(request)
    return SuccessResponse(message="success created", data=account)


@account_router.post("/login", response_model=SuccessResponse, status_code=202)
async def login_account(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SuccessResponse:
    """
    Log an account in.

    Returns the identity, access and refresh tokens of one session.
    """
    tokens = await service.login(PrincipalKind.ACCOUNT, request)
    return SuccessResponse(message="success", data=tokens)


@account_router.get("", response_model=SuccessResponse)
async def get_account(
    principal: AuthenticatedPrincipal = Depends(get_current_account),
    service: IAuthService = Depends(get_auth_service),
) -> SuccessResponse:
    """Get the account that owns the bearer token."""
    account = await service.get_account(principal.principal_id)
    return SuccessResponse(message="success", data=account)


@user_router.post("/register", response_model=SuccessResponse, status_code=202)
async def register_user(
    request: RegisterUserRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SuccessResponse:
    user = await service.register_user(request)
    return SuccessResponse(message="success created", data=user)


@user_router.post("/login", response_model=SuccessResponse, status_code=202)
async def login_user(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SuccessResponse:
    """
    Log a user in.

    Returns the identity, access and refresh tokens of one session.
    """
    tokens = await service.login(PrincipalKind.USER, request)
    return SuccessResponse(message="success", data=tokens)


@user_router.get("", response_model=SuccessResponse)
async def get_user(
    user: User = Depends(get_current_user),
) -> SuccessResponse:
    """Get the user that owns the bearer token. The password hash is never returned."""
    profile = UserResponse(**user.model_dump(exclude={"password"}))
    return SuccessResponse(message="success", data=profile)
