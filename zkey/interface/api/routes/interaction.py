"""Hosted login surface routes.

The login UI reads interaction details to render the consent screen and
posts the authenticated user back to complete the attempt.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials

from zkey.application.usecase.oauth import (
    GetInteractionUseCase,
    LoginInteractionUseCase,
)
from zkey.application.usecase.oauth.get_interaction import InteractionDetailsResponse
from zkey.application.usecase.oauth.login_interaction import (
    LoginInteractionRequest,
    LoginInteractionResponse,
)
from zkey.domain.service import TokenService
from zkey.interface.api.auth import bearer_scheme, optional_user

router = APIRouter(
    prefix="/auth/interaction", tags=["interaction"], route_class=DishkaRoute
)


@router.get("/{interaction_id}", response_model=InteractionDetailsResponse)
async def get_interaction(
    interaction_id: str,
    get_interaction_use_case: FromDishka[GetInteractionUseCase],
) -> InteractionDetailsResponse:
    """Describe an active authorization attempt.

    Example:
        GET /auth/interaction/6f1c...

        Response:
        {"clientName": "Shop", "clientDescription": null, "tenantName": "Acme",
         "logo": null, "scopes": ["openid", "email"],
         "authMethods": {"password": true, "emailOtp": false, ...}}
    """
    return await get_interaction_use_case.execute(interaction_id)


@router.post("/login", response_model=LoginInteractionResponse)
async def login_interaction(
    request: LoginInteractionRequest,
    login_interaction_use_case: FromDishka[LoginInteractionUseCase],
    token_service: FromDishka[TokenService],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> LoginInteractionResponse:
    """Complete an authorization attempt.

    Accepts ``email`` and ``password``, or a bearer access token obtained
    through any login method (optionally with a matching ``userId``).
    Returns the client's redirect URI carrying ``code`` and ``state``.
    """
    user_id = None
    if not (request.email and request.password):
        user_id = optional_user(credentials, token_service)
    return await login_interaction_use_case.execute(request, authenticated_user_id=user_id)
