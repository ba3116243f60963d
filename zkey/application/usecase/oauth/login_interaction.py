"""Interaction login use case."""

from uuid import UUID

import logfire

from zkey.application.usecase.base import CamelModel
from zkey.application.usecase.oauth.get_interaction import parse_interaction_id
from zkey.domain.error import UnauthorizedError, ValidationError
from zkey.domain.service import OAuthService
from zkey.domain.value import UserId


class LoginInteractionRequest(CamelModel):
    """Completes an authorization attempt for an authenticated user.

    Either ``email`` and ``password``, or ``user_id`` backed by a bearer
    access token issued to that user.
    """

    interaction_id: str
    email: str | None = None
    password: str | None = None
    user_id: str | None = None


class LoginInteractionResponse(CamelModel):
    """Redirect back to the relying application."""

    redirect_uri: str


class LoginInteractionUseCase:
    """Use case attaching an authorization code to an interaction."""

    def __init__(self, oauth_service: OAuthService) -> None:
        self.oauth_service = oauth_service

    async def execute(
        self,
        request: LoginInteractionRequest,
        authenticated_user_id: UserId | None = None,
    ) -> LoginInteractionResponse:
        """Authenticate the user and issue the code.

        Args:
            request: Interaction and credentials
            authenticated_user_id: Subject of the caller's bearer token, if any

        Raises:
            ValidationError: If no credentials are supplied
            UnauthorizedError: If ``user_id`` is not backed by a matching token
            InvalidCredentialsError: If email/password do not match
            InteractionInvalidOrExpiredError: If the interaction is not usable
        """
        interaction_id = parse_interaction_id(request.interaction_id)

        if request.email and request.password:
            user = await self.oauth_service.authenticate_for_interaction(
                interaction_id, request.email.strip(), request.password
            )
            user_id = user.id
        elif request.user_id or authenticated_user_id:
            user_id = self._authorized_user(request.user_id, authenticated_user_id)
        else:
            raise ValidationError("Missing login credentials")

        redirect_uri = await self.oauth_service.login_interaction(
            interaction_id, user_id
        )
        return LoginInteractionResponse(redirect_uri=redirect_uri)

    @staticmethod
    def _authorized_user(
        claimed: str | None, authenticated: UserId | None
    ) -> UserId:
        if authenticated is None:
            logfire.warn("Interaction login by user ID without bearer token")
            raise UnauthorizedError("Authentication required")
        if claimed is not None:
            try:
                claimed_id = UUID(claimed)
            except ValueError:
                raise ValidationError("userId must be a UUID")
            if claimed_id != authenticated:
                logfire.warn("Interaction login for a different user")
                raise UnauthorizedError("Token does not belong to userId")
        return authenticated
