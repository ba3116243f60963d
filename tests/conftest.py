"""Test configuration and fixtures."""

import asyncio
import base64
import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import logfire
import pytest

os.environ.setdefault("ENVIRONMENT", "test")

from stellar_sdk import Keypair  # noqa: E402

from zkey.adapter.brevo import MockEmailGateway  # noqa: E402
from zkey.adapter.labsmobile import MockSmsGateway  # noqa: E402
from zkey.adapter.stellar import StellarSignatureVerifier, signed_message_digest  # noqa: E402
from zkey.config import Settings  # noqa: E402
from zkey.domain.model import Application, RefreshToken, Tenant, User  # noqa: E402
from zkey.domain.service import (  # noqa: E402
    InteractionService,
    NotificationService,
    OAuthService,
    OtpService,
    TenantService,
    TokenService,
    UserIdentityService,
    UserService,
    WalletService,
)
from zkey.domain.value import (  # noqa: E402
    ApplicationId,
    AuthMethods,
    InteractionType,
    ProviderCredentials,
    TenantId,
    UserId,
)
from zkey.persistence.repository.inmemory import (  # noqa: E402
    InMemoryApplicationRepository,
    InMemoryInteractionRepository,
    InMemoryRefreshTokenRepository,
    InMemoryTenantRepository,
    InMemoryUserIdentityRepository,
    InMemoryUserRepository,
)

logfire.configure(send_to_logfire=False, console=False)


class FakeClock:
    """Controllable clock for expiry tests."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_tenant(**overrides) -> Tenant:
    """Build a tenant with email and SMS credentials."""
    fields = {
        "id": TenantId(uuid4()),
        "name": "Acme",
        "slug": f"acme-{uuid4().hex[:8]}",
        "integrations": ProviderCredentials(
            email_api_key="brevo-key",
            email_sender="no-reply@acme.example",
            sms_api_key="lm-key",
            sms_user="acme",
        ),
    }
    fields.update(overrides)
    return Tenant(**fields)


def make_application(tenant: Tenant, **overrides) -> Application:
    """Build a public client registered under ``tenant``."""
    fields = {
        "id": ApplicationId(uuid4()),
        "tenant_id": tenant.id,
        "name": "Acme Shop",
        "client_id": f"shop-{uuid4().hex[:8]}",
        "redirect_uris": ["https://shop.example/callback"],
        "auth_methods": AuthMethods(password=True, email_otp=True),
    }
    fields.update(overrides)
    return Application(**fields)


def make_user(tenant: Tenant | None = None, **overrides) -> User:
    """Build a verified user with an email address."""
    fields = {
        "id": UserId(uuid4()),
        "tenant_id": tenant.id if tenant else None,
        "primary_email": f"user-{uuid4().hex[:8]}@example.com",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email_verified": True,
    }
    fields.update(overrides)
    return User(**fields)


class InterleavingInteractionRepository(InMemoryInteractionRepository):
    """Yields to the event loop after every scan.

    Concurrent flows all see the same candidate rows before any of them
    reaches its consume step.
    """

    async def find_active_by_type(self, interaction_type: InteractionType, now):
        matches = await super().find_active_by_type(interaction_type, now)
        await asyncio.sleep(0)
        return matches


class RecordingRefreshTokenRepository(InMemoryRefreshTokenRepository):
    """Keeps every stored refresh row in order."""

    def __init__(self) -> None:
        super().__init__()
        self.saved: list[RefreshToken] = []

    async def save(self, refresh_token: RefreshToken) -> RefreshToken:
        saved = await super().save(refresh_token)
        self.saved.append(saved)
        return saved


class ServiceGraph:
    """Domain services wired to in-memory repositories and a fake clock.

    Mirrors the production wiring, minus the DI container, so tests can
    move time forward.
    """

    def __init__(
        self,
        clock: FakeClock,
        settings: Settings | None = None,
        interaction_repository: InMemoryInteractionRepository | None = None,
    ) -> None:
        self.clock = clock
        self.settings = settings or Settings()

        self.tenant_repository = InMemoryTenantRepository()
        self.application_repository = InMemoryApplicationRepository()
        self.user_repository = InMemoryUserRepository()
        self.user_identity_repository = InMemoryUserIdentityRepository()
        self.interaction_repository = (
            interaction_repository or InMemoryInteractionRepository()
        )
        self.refresh_token_repository = RecordingRefreshTokenRepository()
        self.email_gateway = MockEmailGateway()
        self.sms_gateway = MockSmsGateway()

        self.interaction_service = InteractionService(self.interaction_repository, clock)
        self.tenant_service = TenantService(
            self.tenant_repository, self.application_repository
        )
        self.user_service = UserService(self.user_repository, clock)
        self.user_identity_service = UserIdentityService(self.user_identity_repository)
        self.token_service = TokenService(
            self.settings.auth, self.refresh_token_repository, clock
        )
        self.notification_service = NotificationService(
            self.email_gateway, self.sms_gateway
        )
        self.otp_service = OtpService(
            self.interaction_service,
            self.tenant_service,
            self.user_service,
            self.notification_service,
            self.token_service,
            self.settings.interactions,
        )
        self.wallet_service = WalletService(
            self.interaction_service,
            self.user_service,
            self.user_identity_service,
            self.token_service,
            StellarSignatureVerifier(),
            self.settings.interactions,
        )
        self.oauth_service = OAuthService(
            self.interaction_service,
            self.tenant_service,
            self.user_service,
            self.token_service,
            self.settings,
        )

    async def seed(
        self, tenant: Tenant, *applications: Application, users: tuple[User, ...] = ()
    ) -> None:
        await self.tenant_repository.save(tenant)
        for application in applications:
            await self.application_repository.save(application)
        for user in users:
            await self.user_repository.save(user)


@pytest.fixture
def services(clock: FakeClock) -> ServiceGraph:
    return ServiceGraph(clock)


def sign_nonce(keypair: Keypair, nonce: str) -> str:
    """Sign a challenge nonce the way Stellar wallets sign messages."""
    return base64.b64encode(keypair.sign(signed_message_digest(nonce))).decode()
