"""Domain layer DI providers."""

from dishka import Scope, provide

from zkey.adapter.stellar import StellarSignatureVerifier
from zkey.config import AuthSettings, InteractionSettings, Settings
from zkey.domain.repository import (
    ApplicationRepository,
    InteractionRepository,
    RefreshTokenRepository,
    TenantRepository,
    UserIdentityRepository,
    UserRepository,
)
from zkey.domain.service import (
    EmailGateway,
    InteractionService,
    NotificationService,
    OAuthService,
    OtpService,
    SignatureVerifier,
    SmsGateway,
    TenantService,
    TokenService,
    UserIdentityService,
    UserService,
    WalletService,
)
from zkey.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_signature_verifier(self) -> SignatureVerifier:
        """Provide the wallet signature verifier."""
        return StellarSignatureVerifier()

    @provide
    def get_interaction_service(
        self, interaction_repository: InteractionRepository
    ) -> InteractionService:
        """Provide interaction domain service."""
        return InteractionService(interaction_repository=interaction_repository)

    @provide
    def get_tenant_service(
        self,
        tenant_repository: TenantRepository,
        application_repository: ApplicationRepository,
    ) -> TenantService:
        """Provide tenant domain service."""
        return TenantService(
            tenant_repository=tenant_repository,
            application_repository=application_repository,
        )

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_user_identity_service(
        self, user_identity_repository: UserIdentityRepository
    ) -> UserIdentityService:
        """Provide user identity domain service."""
        return UserIdentityService(user_identity_repository=user_identity_repository)

    @provide
    def get_token_service(
        self,
        auth_settings: AuthSettings,
        refresh_token_repository: RefreshTokenRepository,
    ) -> TokenService:
        """Provide token issuance domain service."""
        return TokenService(
            auth_settings=auth_settings,
            refresh_token_repository=refresh_token_repository,
        )

    @provide
    def get_notification_service(
        self, email_gateway: EmailGateway, sms_gateway: SmsGateway
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(email_gateway=email_gateway, sms_gateway=sms_gateway)

    @provide
    def get_otp_service(
        self,
        interaction_service: InteractionService,
        tenant_service: TenantService,
        user_service: UserService,
        notification_service: NotificationService,
        token_service: TokenService,
        interaction_settings: InteractionSettings,
    ) -> OtpService:
        """Provide OTP domain service."""
        return OtpService(
            interaction_service=interaction_service,
            tenant_service=tenant_service,
            user_service=user_service,
            notification_service=notification_service,
            token_service=token_service,
            interaction_settings=interaction_settings,
        )

    @provide
    def get_wallet_service(
        self,
        interaction_service: InteractionService,
        user_service: UserService,
        user_identity_service: UserIdentityService,
        token_service: TokenService,
        signature_verifier: SignatureVerifier,
        interaction_settings: InteractionSettings,
    ) -> WalletService:
        """Provide wallet challenge domain service."""
        return WalletService(
            interaction_service=interaction_service,
            user_service=user_service,
            user_identity_service=user_identity_service,
            token_service=token_service,
            signature_verifier=signature_verifier,
            interaction_settings=interaction_settings,
        )

    @provide
    def get_oauth_service(
        self,
        interaction_service: InteractionService,
        tenant_service: TenantService,
        user_service: UserService,
        token_service: TokenService,
        settings: Settings,
    ) -> OAuthService:
        """Provide authorization-code flow domain service."""
        return OAuthService(
            interaction_service=interaction_service,
            tenant_service=tenant_service,
            user_service=user_service,
            token_service=token_service,
            settings=settings,
        )
