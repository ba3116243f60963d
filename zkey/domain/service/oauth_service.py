"""OAuth2/OIDC authorization-code flow.

Each authorization attempt lives in one ``oidc_login`` interaction:

    PENDING (no code) -> CONSENTED (code and user attached) -> CONSUMED (deleted)

Expiry ends the attempt from either live state. The authorization code has
no lifetime of its own beyond the interaction's.
"""

import secrets
from dataclasses import dataclass
from urllib.parse import urlencode, urlsplit, urlunsplit

import logfire

from zkey.config import Settings
from zkey.domain.error import (
    ClientMismatchError,
    InteractionInvalidOrExpiredError,
    InvalidAuthorizationCodeError,
    InvalidClientError,
    InvalidRedirectUriError,
    NotFoundError,
)
from zkey.domain.model import Interaction, OidcLoginDetails, User
from zkey.domain.value import AuthMethods, InteractionId, InteractionType, UserId

from .base import Service
from .interaction_service import InteractionService
from .tenant_service import TenantService
from .token_service import TokenService
from .user_service import UserService


@dataclass(frozen=True)
class InteractionView:
    """Display metadata for the hosted consent screen."""

    client_name: str
    client_description: str | None
    tenant_name: str
    logo: str | None
    scopes: list[str]
    auth_methods: AuthMethods


@dataclass(frozen=True)
class TokenGrant:
    """Result of a successful code exchange."""

    access_token: str
    refresh_token: str
    expires_in: int
    id_token: str
    token_type: str = "Bearer"


def append_query(url: str, params: dict[str, str]) -> str:
    """Append query parameters, keeping any the URL already has."""
    parts = urlsplit(url)
    query = f"{parts.query}&{urlencode(params)}" if parts.query else urlencode(params)
    return urlunsplit(parts._replace(query=query))


class OAuthService(Service):
    """Domain service driving the authorization-code grant."""

    def __init__(
        self,
        interaction_service: InteractionService,
        tenant_service: TenantService,
        user_service: UserService,
        token_service: TokenService,
        settings: Settings,
    ) -> None:
        self.interaction_service = interaction_service
        self.tenant_service = tenant_service
        self.user_service = user_service
        self.token_service = token_service
        self.settings = settings

    async def start_interaction(
        self,
        client_id: str,
        redirect_uri: str,
        scope: str,
        state: str | None = None,
        nonce: str | None = None,
    ) -> tuple[Interaction, str]:
        """Validate the client/redirect pair and open a PENDING interaction.

        Returns:
            Tuple of (interaction, hosted login URL carrying its ID)

        Raises:
            InvalidClientError: If the client is unknown
            InvalidRedirectUriError: If the redirect URI is not registered verbatim
        """
        with logfire.span("oauth_service.start_interaction", client_id=client_id):
            application = await self.tenant_service.get_application(client_id)
            if not application:
                raise InvalidClientError()
            if not self.tenant_service.is_redirect_uri_registered(
                application, redirect_uri
            ):
                logfire.warn(
                    "Unregistered redirect_uri",
                    client_id=client_id,
                    redirect_uri=redirect_uri,
                )
                raise InvalidRedirectUriError()

            tenant = await self.tenant_service.get_tenant(application.tenant_id)
            interaction = await self.interaction_service.create(
                OidcLoginDetails(
                    client_id=client_id,
                    redirect_uri=redirect_uri,
                    scope=scope,
                    state=state,
                    nonce=nonce,
                ),
                ttl_seconds=self.settings.interactions.oidc_login_ttl_seconds,
            )

            login_base = (tenant.login_url or self.settings.api.login_url).rstrip("/")
            login_url = append_query(
                f"{login_base}/auth/login", {"interactionId": str(interaction.id)}
            )
            logfire.info(
                "Authorization started",
                client_id=client_id,
                interaction_id=str(interaction.id),
            )
            return interaction, login_url

    async def _get_login_interaction(
        self, interaction_id: InteractionId
    ) -> tuple[Interaction, OidcLoginDetails]:
        interaction = await self.interaction_service.find_active_by_id(interaction_id)
        if not interaction or interaction.type != InteractionType.OIDC_LOGIN.value:
            raise InteractionInvalidOrExpiredError()
        return interaction, interaction.details

    async def get_interaction_details(
        self, interaction_id: InteractionId
    ) -> InteractionView:
        """Describe an active authorization attempt for the consent screen.

        Raises:
            InteractionInvalidOrExpiredError: If expired, unknown or not an OIDC login
        """
        with logfire.span(
            "oauth_service.get_interaction_details", interaction_id=str(interaction_id)
        ):
            _, details = await self._get_login_interaction(interaction_id)
            try:
                application, tenant = await self.tenant_service.resolve_client(
                    details.client_id
                )
            except NotFoundError:
                raise InteractionInvalidOrExpiredError()

            return InteractionView(
                client_name=application.name,
                client_description=application.description,
                tenant_name=tenant.name,
                logo=application.logo or tenant.logo,
                scopes=details.scope.split(),
                auth_methods=application.auth_methods,
            )

    async def authenticate_for_interaction(
        self, interaction_id: InteractionId, email: str, password: str
    ) -> User:
        """Authenticate an email/password pair in the interaction's tenant.

        Raises:
            InteractionInvalidOrExpiredError: If the interaction is not usable
            InvalidCredentialsError: If the pair does not match
            UnverifiedAccountError: If the account has no verified channel
        """
        _, details = await self._get_login_interaction(interaction_id)
        application = await self.tenant_service.get_application(details.client_id)
        if not application:
            raise InteractionInvalidOrExpiredError()
        return await self.user_service.authenticate(
            email, password, application.tenant_id
        )

    async def login_interaction(
        self, interaction_id: InteractionId, user_id: UserId
    ) -> str:
        """Attach an authorization code and user to the interaction.

        Moves the attempt to CONSENTED. The interaction is kept until the
        code is exchanged.

        Returns:
            The client's redirect URI carrying ``code`` and, if present, ``state``

        Raises:
            InteractionInvalidOrExpiredError: If the interaction is not usable or
                already carries a code
        """
        with logfire.span(
            "oauth_service.login_interaction",
            interaction_id=str(interaction_id),
            user_id=str(user_id),
        ):
            _, details = await self._get_login_interaction(interaction_id)
            if details.is_consented:
                logfire.warn(
                    "Interaction already consented", interaction_id=str(interaction_id)
                )
                raise InteractionInvalidOrExpiredError()
            await self.user_service.get_by_id(user_id)

            code = secrets.token_urlsafe(32)
            await self.interaction_service.mutate(
                interaction_id, {"code": code, "user_id": user_id}
            )

            params = {"code": code}
            if details.state:
                params["state"] = details.state
            logfire.info(
                "Authorization code issued",
                interaction_id=str(interaction_id),
                client_id=details.client_id,
            )
            return append_query(details.redirect_uri, params)

    async def exchange_code(
        self,
        code: str,
        client_id: str,
        client_secret: str | None = None,
        redirect_uri: str | None = None,
    ) -> TokenGrant:
        """Exchange an authorization code for tokens.

        Tokens are signed first and the interaction consumed only then, so a
        failure while signing leaves the code usable. The consume is atomic:
        a concurrent second exchange of the same code fails and stores no
        refresh token.

        Raises:
            InvalidAuthorizationCodeError: If the code is unknown, expired or used
            ClientMismatchError: If the code was issued to another client
            InvalidClientError: If a confidential client's secret is wrong
        """
        with logfire.span("oauth_service.exchange_code", client_id=client_id):
            interaction = await self.interaction_service.find_active_by_predicate(
                InteractionType.OIDC_LOGIN,
                lambda details: details.code is not None
                and secrets.compare_digest(details.code.encode(), code.encode()),
            )
            if not interaction:
                raise InvalidAuthorizationCodeError()

            details: OidcLoginDetails = interaction.details
            if details.client_id != client_id:
                logfire.warn(
                    "Authorization code presented by another client",
                    client_id=client_id,
                    interaction_id=str(interaction.id),
                )
                raise ClientMismatchError()

            application = await self.tenant_service.get_application(client_id)
            if not application:
                raise InvalidClientError()
            if application.is_confidential and not (
                client_secret
                and secrets.compare_digest(
                    client_secret.encode(), application.client_secret.encode()
                )
            ):
                logfire.warn("Client authentication failed", client_id=client_id)
                raise InvalidClientError("Invalid client credentials")
            if redirect_uri is not None and redirect_uri != details.redirect_uri:
                raise InvalidAuthorizationCodeError("redirect_uri mismatch")
            if details.user_id is None:
                raise InvalidAuthorizationCodeError()

            user = await self.user_service.get_by_id(details.user_id)
            minted = self.token_service.mint_tokens(
                user.id, application, scopes=details.scope.split()
            )
            id_token = self.token_service.generate_id_token(
                user, client_id, details.nonce
            )

            if not await self.interaction_service.consume(interaction.id):
                raise InvalidAuthorizationCodeError()
            # Only the exchange that won the consume leaves a refresh row
            tokens = await self.token_service.record_refresh_token(minted)

            logfire.info(
                "Authorization code exchanged",
                client_id=client_id,
                user_id=str(user.id),
            )
            return TokenGrant(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                expires_in=tokens.expires_in,
                id_token=id_token,
            )
