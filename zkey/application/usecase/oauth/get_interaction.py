"""Interaction details use case."""

from uuid import UUID

from zkey.application.usecase.base import CamelModel
from zkey.domain.error import InteractionInvalidOrExpiredError
from zkey.domain.service import OAuthService
from zkey.domain.value import InteractionId


class AuthMethodsInfo(CamelModel):
    """Login methods offered on the consent screen."""

    password: bool
    email_otp: bool
    sms_otp: bool
    wallet: bool


class InteractionDetailsResponse(CamelModel):
    """Consent screen metadata."""

    client_name: str
    client_description: str | None
    tenant_name: str
    logo: str | None
    scopes: list[str]
    auth_methods: AuthMethodsInfo


def parse_interaction_id(value: str) -> InteractionId:
    """Parse an interaction ID, treating malformed IDs as invalid interactions."""
    try:
        return InteractionId(UUID(value))
    except ValueError:
        raise InteractionInvalidOrExpiredError()


class GetInteractionUseCase:
    """Use case describing an authorization attempt to the hosted login UI."""

    def __init__(self, oauth_service: OAuthService) -> None:
        self.oauth_service = oauth_service

    async def execute(self, interaction_id: str) -> InteractionDetailsResponse:
        """Raises InteractionInvalidOrExpiredError for unusable interactions."""
        view = await self.oauth_service.get_interaction_details(
            parse_interaction_id(interaction_id)
        )
        return InteractionDetailsResponse(
            client_name=view.client_name,
            client_description=view.client_description,
            tenant_name=view.tenant_name,
            logo=view.logo,
            scopes=view.scopes,
            auth_methods=AuthMethodsInfo(**view.auth_methods.model_dump()),
        )
