"""OAuth 2.0 / OpenID Connect routes for relying applications."""

import json
import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError as PydanticValidationError

from zkey.application.usecase.oauth import AuthorizeUseCase, ExchangeCodeUseCase
from zkey.application.usecase.oauth.authorize import AuthorizeRequest
from zkey.application.usecase.oauth.exchange_code import TokenRequest, TokenResponse
from zkey.domain.error import OAuthError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/oauth", tags=["oauth"], route_class=DishkaRoute)


@router.get("/authorize")
async def authorize(
    authorize_use_case: FromDishka[AuthorizeUseCase],
    client_id: str = Query(...),
    redirect_uri: str = Query(...),
    scope: str = Query(...),
    state: str | None = Query(None),
    nonce: str | None = Query(None),
) -> RedirectResponse:
    """Start an authorization-code attempt.

    Redirects the user agent to the hosted login surface with the
    interaction ID in the query string. Invalid clients and unregistered
    redirect URIs get a 400 instead of a redirect.

    Example:
        GET /oauth/authorize?client_id=shop&redirect_uri=https://shop.example/cb&scope=openid

        Response: 302 Location: https://login.example/auth/login?interactionId=...
    """
    response = await authorize_use_case.execute(
        AuthorizeRequest(
            client_id=client_id,
            redirect_uri=redirect_uri,
            scope=scope,
            state=state,
            nonce=nonce,
        )
    )
    return RedirectResponse(url=response.login_url, status_code=status.HTTP_302_FOUND)


async def _token_params(request: Request) -> dict:
    """Read token endpoint parameters from a form or JSON body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    try:
        body = await request.json()
    except json.JSONDecodeError:
        raise OAuthError("Malformed request body")
    if not isinstance(body, dict):
        raise OAuthError("Malformed request body")
    return body


@router.post("/token", response_model=TokenResponse)
async def token(
    request: Request,
    exchange_code_use_case: FromDishka[ExchangeCodeUseCase],
) -> TokenResponse:
    """Exchange an authorization code for tokens.

    Accepts ``application/x-www-form-urlencoded`` (RFC 6749) or JSON.

    Example:
        POST /oauth/token
        grant_type=authorization_code&code=...&client_id=shop&redirect_uri=...

        Response:
        {"access_token": "...", "refresh_token": "...", "token_type": "Bearer",
         "expires_in": 3600, "id_token": "..."}
    """
    params = await _token_params(request)
    try:
        token_request = TokenRequest.model_validate(params)
    except PydanticValidationError as e:
        missing = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        logger.info(f"Token request rejected: fields={missing}")
        raise OAuthError(f"Invalid or missing parameters: {', '.join(missing)}")
    return await exchange_code_use_case.execute(token_request)
