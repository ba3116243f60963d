"""Registration use case."""

import logfire
from pydantic import Field

from zkey.application.usecase.auth.tenant_scope import resolve_tenant_scope
from zkey.application.usecase.base import BaseUseCase, CamelModel
from zkey.domain.error import ValidationError
from zkey.domain.service import (
    InteractionService,
    TenantService,
    TokenService,
    UserIdentityService,
    UserService,
    WalletService,
)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class RegisterRequest(CamelModel):
    """Registration request."""

    email: str | None = None
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    phone: str | None = None
    password: str | None = Field(default=None, min_length=8)
    wallet_address: str | None = None
    signature: str | None = None
    tenant_id: str | None = None
    client_id: str | None = None  # Client ID or interaction ID


class RegisterResponse(CamelModel):
    """Registration response."""

    user_id: str
    access_token: str
    refresh_token: str


class RegisterUseCase(BaseUseCase):
    """Use case for registering a user in a tenant."""

    def __init__(
        self,
        interaction_service: InteractionService,
        tenant_service: TenantService,
        user_service: UserService,
        user_identity_service: UserIdentityService,
        wallet_service: WalletService,
        token_service: TokenService,
    ) -> None:
        self.interaction_service = interaction_service
        self.tenant_service = tenant_service
        self.user_service = user_service
        self.user_identity_service = user_identity_service
        self.wallet_service = wallet_service
        self.token_service = token_service

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Register a user.

        Steps:
        1. Resolve the tenant from tenantId, or from the client/interaction
        2. Reject identifiers already held by an active user of the tenant
        3. Find a soft-deleted account of the tenant the identifiers point at
        4. If a wallet is supplied, verify and consume its signed challenge
        5. Restore that account or create a new one, link the wallet identity
           unless it already exists, issue tokens

        Raises:
            ValidationError: If no tenant resolves, no identifier is given, or a
                wallet comes without a signature
            ConflictError: If an identifier is already registered, or the
                identifiers point at different deleted accounts
            ChallengeNotFoundError: If the wallet has no active challenge
            SignatureInvalidError: If the wallet signature does not verify
        """
        email = _clean(request.email)
        phone = _clean(request.phone)
        wallet = _clean(request.wallet_address)

        if not (email or phone):
            raise ValidationError("email or phone is required")
        if wallet and not request.signature:
            raise ValidationError("signature is required when registering a wallet")

        tenant_id, application = await resolve_tenant_scope(
            self.interaction_service,
            self.tenant_service,
            request.tenant_id,
            request.client_id,
        )

        with logfire.span("register_user", tenant_id=str(tenant_id), has_wallet=bool(wallet)):
            await self.user_service.ensure_available(
                tenant_id, email=email, phone_number=phone, wallet_address=wallet
            )
            # Identity rows are global across tenants
            identity = (
                await self.user_identity_service.get_identity_by_provider(
                    self.wallet_service.provider, wallet
                )
                if wallet
                else None
            )
            restorable = await self.user_service.find_restorable(
                tenant_id,
                email=email,
                phone_number=phone,
                wallet_address=wallet,
                wallet_owner_id=identity.user_id if identity else None,
            )
            if wallet:
                await self.wallet_service.verify_challenge(wallet, request.signature)

            profile = {
                "email": email,
                "phone_number": phone,
                "first_name": _clean(request.first_name),
                "last_name": _clean(request.last_name),
                "wallet_address": wallet,
                "password": request.password,
            }
            if restorable:
                user = await self.user_service.restore_user(restorable, **profile)
            else:
                user = await self.user_service.create_user(tenant_id=tenant_id, **profile)
            if wallet and not identity:
                await self.user_identity_service.link(
                    user.id, self.wallet_service.provider, wallet
                )

            tokens = await self.token_service.generate_tokens(user.id, application)
            logfire.info("User registered", user_id=str(user.id))

            return RegisterResponse(
                user_id=str(user.id),
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
            )
