"""Application layer DI providers."""

from dishka import Scope, provide

from zkey.application.usecase.auth import (
    GetProfileUseCase,
    LoginUseCase,
    RegisterUseCase,
    UpdateProfileUseCase,
)
from zkey.application.usecase.oauth import (
    AuthorizeUseCase,
    ExchangeCodeUseCase,
    GetInteractionUseCase,
    LoginInteractionUseCase,
)
from zkey.application.usecase.otp import RequestOtpUseCase, VerifyOtpUseCase
from zkey.application.usecase.wallet import (
    GetNonceUseCase,
    UnlinkWalletUseCase,
    WalletLoginUseCase,
)
from zkey.domain.service import (
    InteractionService,
    OAuthService,
    OtpService,
    TenantService,
    TokenService,
    UserIdentityService,
    UserService,
    WalletService,
)
from zkey.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Account use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self,
        interaction_service: InteractionService,
        tenant_service: TenantService,
        user_service: UserService,
        user_identity_service: UserIdentityService,
        wallet_service: WalletService,
        token_service: TokenService,
    ) -> RegisterUseCase:
        """Provide registration use case."""
        return RegisterUseCase(
            interaction_service=interaction_service,
            tenant_service=tenant_service,
            user_service=user_service,
            user_identity_service=user_identity_service,
            wallet_service=wallet_service,
            token_service=token_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        interaction_service: InteractionService,
        tenant_service: TenantService,
        user_service: UserService,
        token_service: TokenService,
    ) -> LoginUseCase:
        """Provide password login use case."""
        return LoginUseCase(
            interaction_service=interaction_service,
            tenant_service=tenant_service,
            user_service=user_service,
            token_service=token_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_profile_use_case(self, user_service: UserService) -> GetProfileUseCase:
        """Provide get profile use case."""
        return GetProfileUseCase(user_service=user_service)

    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, user_service: UserService
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(user_service=user_service)

    # OTP use cases
    @provide(scope=Scope.REQUEST)
    def get_request_otp_use_case(self, otp_service: OtpService) -> RequestOtpUseCase:
        """Provide OTP request use case."""
        return RequestOtpUseCase(otp_service=otp_service)

    @provide(scope=Scope.REQUEST)
    def get_verify_otp_use_case(self, otp_service: OtpService) -> VerifyOtpUseCase:
        """Provide OTP verification use case."""
        return VerifyOtpUseCase(otp_service=otp_service)

    # Wallet use cases
    @provide(scope=Scope.REQUEST)
    def get_get_nonce_use_case(self, wallet_service: WalletService) -> GetNonceUseCase:
        """Provide nonce issuance use case."""
        return GetNonceUseCase(wallet_service=wallet_service)

    @provide(scope=Scope.REQUEST)
    def get_wallet_login_use_case(
        self, wallet_service: WalletService
    ) -> WalletLoginUseCase:
        """Provide wallet login use case."""
        return WalletLoginUseCase(wallet_service=wallet_service)

    @provide(scope=Scope.REQUEST)
    def get_unlink_wallet_use_case(
        self, wallet_service: WalletService
    ) -> UnlinkWalletUseCase:
        """Provide wallet unlink use case."""
        return UnlinkWalletUseCase(wallet_service=wallet_service)

    # OAuth use cases
    @provide(scope=Scope.REQUEST)
    def get_authorize_use_case(self, oauth_service: OAuthService) -> AuthorizeUseCase:
        """Provide authorization request use case."""
        return AuthorizeUseCase(oauth_service=oauth_service)

    @provide(scope=Scope.REQUEST)
    def get_exchange_code_use_case(
        self, oauth_service: OAuthService
    ) -> ExchangeCodeUseCase:
        """Provide code exchange use case."""
        return ExchangeCodeUseCase(oauth_service=oauth_service)

    @provide(scope=Scope.REQUEST)
    def get_get_interaction_use_case(
        self, oauth_service: OAuthService
    ) -> GetInteractionUseCase:
        """Provide interaction details use case."""
        return GetInteractionUseCase(oauth_service=oauth_service)

    @provide(scope=Scope.REQUEST)
    def get_login_interaction_use_case(
        self, oauth_service: OAuthService
    ) -> LoginInteractionUseCase:
        """Provide interaction login use case."""
        return LoginInteractionUseCase(oauth_service=oauth_service)
