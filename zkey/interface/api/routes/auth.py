"""Account routes: registration, password login and profile."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials

from zkey.application.usecase.auth import (
    GetProfileUseCase,
    LoginUseCase,
    RegisterUseCase,
    UpdateProfileUseCase,
)
from zkey.application.usecase.auth.login import LoginRequest
from zkey.application.usecase.auth.profile import ProfileResponse, UpdateProfileRequest
from zkey.application.usecase.auth.register import RegisterRequest, RegisterResponse
from zkey.application.usecase.base import TokenPairResponse
from zkey.domain.service import TokenService
from zkey.interface.api.auth import bearer_scheme, require_user

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: RegisterRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> RegisterResponse:
    """Register a user in a tenant and sign them in.

    The tenant comes from ``tenantId``, or from ``clientId`` which may name
    an application or an in-flight interaction.

    Example:
        POST /auth/register
        {"email": "alice@example.com", "firstName": "Alice", "clientId": "shop"}

        Response (201):
        {"userId": "...", "accessToken": "...", "refreshToken": "..."}
    """
    return await register_use_case.execute(request)


@router.post("/login", response_model=TokenPairResponse)
async def login(
    request: LoginRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> TokenPairResponse:
    """Authenticate with email and password."""
    return await login_use_case.execute(request)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(
    get_profile_use_case: FromDishka[GetProfileUseCase],
    token_service: FromDishka[TokenService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> ProfileResponse:
    """Get the authenticated user's profile."""
    user_id = require_user(credentials, token_service)
    return await get_profile_use_case.execute(user_id)


@router.patch("/profile", response_model=ProfileResponse)
async def update_profile(
    request: UpdateProfileRequest,
    update_profile_use_case: FromDishka[UpdateProfileUseCase],
    token_service: FromDishka[TokenService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> ProfileResponse:
    """Update name, phone or wallet address of the authenticated user.

    Omitted fields are left unchanged. Changing the phone number clears its
    verified flag.
    """
    user_id = require_user(credentials, token_service)
    return await update_profile_use_case.execute(user_id, request)
