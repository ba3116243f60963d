"""Authorization request use case."""

from pydantic import BaseModel, Field

from zkey.domain.service import OAuthService


class AuthorizeRequest(BaseModel):
    """Authorization request parameters, as sent by the relying application."""

    client_id: str = Field(min_length=1)
    redirect_uri: str = Field(min_length=1)
    scope: str = Field(min_length=1)
    state: str | None = None
    nonce: str | None = None


class AuthorizeResponse(BaseModel):
    """Where to send the user agent next."""

    interaction_id: str
    login_url: str


class AuthorizeUseCase:
    """Use case starting an authorization-code attempt."""

    def __init__(self, oauth_service: OAuthService) -> None:
        self.oauth_service = oauth_service

    async def execute(self, request: AuthorizeRequest) -> AuthorizeResponse:
        """Raises InvalidClientError or InvalidRedirectUriError."""
        interaction, login_url = await self.oauth_service.start_interaction(
            client_id=request.client_id,
            redirect_uri=request.redirect_uri,
            scope=request.scope,
            state=request.state,
            nonce=request.nonce,
        )
        return AuthorizeResponse(interaction_id=str(interaction.id), login_url=login_url)
