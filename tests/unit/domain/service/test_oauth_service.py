"""Unit tests for OAuthService."""

from urllib.parse import parse_qs, urlsplit

import jwt
import pytest
import pytest_asyncio

from zkey.domain.error import (
    ClientMismatchError,
    InteractionInvalidOrExpiredError,
    InvalidAuthorizationCodeError,
    InvalidClientError,
    InvalidRedirectUriError,
)
from zkey.domain.service.oauth_service import append_query
from zkey.domain.service.token_service import hash_token
from zkey.domain.value import InteractionType
from zkey.util.password import hash_password
from tests.conftest import (
    FakeClock,
    ServiceGraph,
    make_application,
    make_tenant,
    make_user,
)

REDIRECT_URI = "https://shop.example/callback"


@pytest_asyncio.fixture
async def client(services: ServiceGraph):
    tenant = make_tenant(logo="https://acme.example/logo.png")
    application = make_application(tenant, description="Online store")
    user = make_user(tenant, password_hash=hash_password("correct horse"))
    await services.seed(tenant, application, users=(user,))
    return tenant, application, user


def _code(redirect: str) -> str:
    return parse_qs(urlsplit(redirect).query)["code"][0]


class TestAppendQuery:
    """Tests for redirect URL construction."""

    def test_plain_url(self):
        assert append_query("https://a.example/cb", {"code": "x"}) == (
            "https://a.example/cb?code=x"
        )

    def test_existing_query_is_kept(self):
        assert append_query("https://a.example/cb?tab=1", {"state": "s t"}) == (
            "https://a.example/cb?tab=1&state=s+t"
        )


class TestStartInteraction:
    """Tests for the authorization endpoint."""

    @pytest.mark.asyncio
    async def test_login_url_carries_interaction(self, services: ServiceGraph, client):
        _, application, _ = client

        interaction, login_url = await services.oauth_service.start_interaction(
            application.client_id, REDIRECT_URI, "openid email", state="xyz"
        )

        assert login_url == (
            f"{services.settings.api.login_url}/auth/login"
            f"?interactionId={interaction.id}"
        )
        assert interaction.details.state == "xyz"
        assert interaction.details.code is None

    @pytest.mark.asyncio
    async def test_tenant_login_url_wins(self, services: ServiceGraph):
        tenant = make_tenant(login_url="https://login.acme.example/")
        application = make_application(tenant)
        await services.seed(tenant, application)

        _, login_url = await services.oauth_service.start_interaction(
            application.client_id, REDIRECT_URI, "openid"
        )

        assert login_url.startswith("https://login.acme.example/auth/login?")

    @pytest.mark.asyncio
    async def test_unknown_client(self, services: ServiceGraph):
        with pytest.raises(InvalidClientError):
            await services.oauth_service.start_interaction(
                "nope", REDIRECT_URI, "openid"
            )

    @pytest.mark.asyncio
    async def test_unregistered_redirect(self, services: ServiceGraph, client):
        _, application, _ = client

        with pytest.raises(InvalidRedirectUriError):
            await services.oauth_service.start_interaction(
                application.client_id, REDIRECT_URI + "/evil", "openid"
            )
        assert (
            await services.interaction_repository.find_active_by_type(
                InteractionType.OIDC_LOGIN, services.clock()
            )
            == []
        )


class TestInteractionDetails:
    """Tests for consent screen metadata."""

    @pytest.mark.asyncio
    async def test_describes_client(self, services: ServiceGraph, client):
        tenant, application, _ = client
        interaction, _ = await services.oauth_service.start_interaction(
            application.client_id, REDIRECT_URI, "openid profile"
        )

        view = await services.oauth_service.get_interaction_details(interaction.id)

        assert view.client_name == "Acme Shop"
        assert view.client_description == "Online store"
        assert view.tenant_name == tenant.name
        assert view.logo == tenant.logo
        assert view.scopes == ["openid", "profile"]
        assert view.auth_methods.email_otp is True

    @pytest.mark.asyncio
    async def test_expired_interaction(
        self, services: ServiceGraph, client, clock: FakeClock
    ):
        _, application, _ = client
        interaction, _ = await services.oauth_service.start_interaction(
            application.client_id, REDIRECT_URI, "openid"
        )
        clock.advance(
            seconds=services.settings.interactions.oidc_login_ttl_seconds + 1
        )

        with pytest.raises(InteractionInvalidOrExpiredError):
            await services.oauth_service.get_interaction_details(interaction.id)

    @pytest.mark.asyncio
    async def test_other_interaction_type(self, services: ServiceGraph):
        await services.wallet_service.issue_nonce("GADDRESS")
        (wallet_interaction,) = await services.interaction_repository.find_active_by_type(
            InteractionType.WALLET_CHALLENGE, services.clock()
        )

        with pytest.raises(InteractionInvalidOrExpiredError):
            await services.oauth_service.get_interaction_details(wallet_interaction.id)


class TestAuthorizationCodeFlow:
    """End-to-end behaviour of the grant at the service level."""

    async def _consent(self, services: ServiceGraph, client, nonce=None, state=None):
        _, application, user = client
        interaction, _ = await services.oauth_service.start_interaction(
            application.client_id, REDIRECT_URI, "openid email", state=state, nonce=nonce
        )
        redirect = await services.oauth_service.login_interaction(
            interaction.id, user.id
        )
        return interaction, redirect

    @pytest.mark.asyncio
    async def test_full_flow(self, services: ServiceGraph, client):
        _, application, user = client
        _, redirect = await self._consent(services, client, nonce="n-0S6", state="af0")

        assert redirect.startswith(REDIRECT_URI + "?")
        assert parse_qs(urlsplit(redirect).query)["state"] == ["af0"]

        grant = await services.oauth_service.exchange_code(
            _code(redirect), application.client_id, redirect_uri=REDIRECT_URI
        )

        assert grant.token_type == "Bearer"
        assert grant.expires_in == services.settings.auth.access_token_ttl_seconds
        claims = jwt.decode(
            grant.id_token,
            services.settings.auth.jwt_secret,
            algorithms=["HS256"],
            audience=application.client_id,
        )
        assert claims["sub"] == str(user.id)
        assert claims["nonce"] == "n-0S6"
        assert services.token_service.authenticate_access_token(grant.access_token) == user.id
        stored = await services.refresh_token_repository.find_by_hash(
            hash_token(grant.refresh_token)
        )
        assert stored.scopes == ["openid", "email"]
        assert stored.client_id == application.client_id

    @pytest.mark.asyncio
    async def test_redirect_without_state(self, services: ServiceGraph, client):
        _, redirect = await self._consent(services, client)

        assert "state" not in parse_qs(urlsplit(redirect).query)

    @pytest.mark.asyncio
    async def test_code_is_single_use(self, services: ServiceGraph, client):
        _, application, _ = client
        _, redirect = await self._consent(services, client)
        code = _code(redirect)
        await services.oauth_service.exchange_code(code, application.client_id)

        with pytest.raises(InvalidAuthorizationCodeError):
            await services.oauth_service.exchange_code(code, application.client_id)

    @pytest.mark.asyncio
    async def test_unknown_code(self, services: ServiceGraph, client):
        _, application, _ = client

        with pytest.raises(InvalidAuthorizationCodeError):
            await services.oauth_service.exchange_code("bogus", application.client_id)

    @pytest.mark.asyncio
    async def test_code_for_other_client(self, services: ServiceGraph, client):
        tenant, _, _ = client
        other = make_application(tenant)
        await services.application_repository.save(other)
        _, redirect = await self._consent(services, client)

        with pytest.raises(ClientMismatchError):
            await services.oauth_service.exchange_code(_code(redirect), other.client_id)

    @pytest.mark.asyncio
    async def test_redirect_uri_must_match(self, services: ServiceGraph, client):
        _, application, _ = client
        _, redirect = await self._consent(services, client)

        with pytest.raises(InvalidAuthorizationCodeError):
            await services.oauth_service.exchange_code(
                _code(redirect),
                application.client_id,
                redirect_uri="https://shop.example/other",
            )

    @pytest.mark.asyncio
    async def test_expired_code(
        self, services: ServiceGraph, client, clock: FakeClock
    ):
        _, application, _ = client
        _, redirect = await self._consent(services, client)
        clock.advance(
            seconds=services.settings.interactions.oidc_login_ttl_seconds + 1
        )

        with pytest.raises(InvalidAuthorizationCodeError):
            await services.oauth_service.exchange_code(
                _code(redirect), application.client_id
            )

    @pytest.mark.asyncio
    async def test_second_login_is_rejected(self, services: ServiceGraph, client):
        _, _, user = client
        interaction, _ = await self._consent(services, client)

        with pytest.raises(InteractionInvalidOrExpiredError):
            await services.oauth_service.login_interaction(interaction.id, user.id)

    @pytest.mark.asyncio
    async def test_password_login_for_interaction(
        self, services: ServiceGraph, client
    ):
        _, application, user = client
        interaction, _ = await services.oauth_service.start_interaction(
            application.client_id, REDIRECT_URI, "openid"
        )

        authenticated = await services.oauth_service.authenticate_for_interaction(
            interaction.id, user.primary_email, "correct horse"
        )

        assert authenticated.id == user.id


class TestConfidentialClient:
    """Tests for client secret checks at the token endpoint."""

    @pytest_asyncio.fixture
    async def confidential(self, services: ServiceGraph):
        tenant = make_tenant()
        application = make_application(tenant, client_secret="s3cret")
        user = make_user(tenant)
        await services.seed(tenant, application, users=(user,))
        interaction, _ = await services.oauth_service.start_interaction(
            application.client_id, REDIRECT_URI, "openid"
        )
        redirect = await services.oauth_service.login_interaction(
            interaction.id, user.id
        )
        return application, _code(redirect)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("secret", [None, "wrong"])
    async def test_bad_secret(self, services: ServiceGraph, confidential, secret):
        application, code = confidential

        with pytest.raises(InvalidClientError):
            await services.oauth_service.exchange_code(
                code, application.client_id, client_secret=secret
            )

    @pytest.mark.asyncio
    async def test_failed_secret_keeps_code(self, services: ServiceGraph, confidential):
        application, code = confidential
        with pytest.raises(InvalidClientError):
            await services.oauth_service.exchange_code(
                code, application.client_id, client_secret="wrong"
            )

        grant = await services.oauth_service.exchange_code(
            code, application.client_id, client_secret="s3cret"
        )

        assert grant.access_token
