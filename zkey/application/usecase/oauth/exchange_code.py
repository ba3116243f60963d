"""Token endpoint use case."""

from pydantic import BaseModel

from zkey.domain.error import InvalidAuthorizationCodeError, UnsupportedGrantTypeError
from zkey.domain.service import OAuthService


class TokenRequest(BaseModel):
    """Token endpoint request (snake_case, as defined by OAuth 2.0)."""

    grant_type: str
    code: str | None = None
    client_id: str
    client_secret: str | None = None
    redirect_uri: str | None = None


class TokenResponse(BaseModel):
    """Token endpoint response."""

    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int
    id_token: str


class ExchangeCodeUseCase:
    """Use case for the authorization_code grant."""

    def __init__(self, oauth_service: OAuthService) -> None:
        self.oauth_service = oauth_service

    async def execute(self, request: TokenRequest) -> TokenResponse:
        """Exchange an authorization code for tokens.

        Raises:
            UnsupportedGrantTypeError: For any grant other than authorization_code
            InvalidAuthorizationCodeError: If the code is missing, unknown or used
            ClientMismatchError: If the code belongs to another client
            InvalidClientError: If client authentication fails
        """
        if request.grant_type != "authorization_code":
            raise UnsupportedGrantTypeError()
        if not request.code:
            raise InvalidAuthorizationCodeError("Missing code")

        grant = await self.oauth_service.exchange_code(
            code=request.code,
            client_id=request.client_id,
            client_secret=request.client_secret,
            redirect_uri=request.redirect_uri,
        )
        return TokenResponse(
            access_token=grant.access_token,
            refresh_token=grant.refresh_token,
            token_type=grant.token_type,
            expires_in=grant.expires_in,
            id_token=grant.id_token,
        )
