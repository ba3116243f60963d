"""Password login use case."""

from zkey.application.usecase.auth.tenant_scope import resolve_tenant_scope
from zkey.application.usecase.base import CamelModel, TokenPairResponse
from zkey.domain.service import (
    InteractionService,
    TenantService,
    TokenService,
    UserService,
)


class LoginRequest(CamelModel):
    """Email/password login request."""

    email: str
    password: str
    tenant_id: str | None = None
    client_id: str | None = None  # Client ID or interaction ID


class LoginUseCase:
    """Use case for email/password login within a tenant."""

    def __init__(
        self,
        interaction_service: InteractionService,
        tenant_service: TenantService,
        user_service: UserService,
        token_service: TokenService,
    ) -> None:
        self.interaction_service = interaction_service
        self.tenant_service = tenant_service
        self.user_service = user_service
        self.token_service = token_service

    async def execute(self, request: LoginRequest) -> TokenPairResponse:
        """Authenticate and issue tokens.

        Raises:
            ValidationError: If no tenant resolves
            InvalidCredentialsError: If the email/password pair does not match
            UnverifiedAccountError: If neither email nor phone is verified
        """
        tenant_id, application = await resolve_tenant_scope(
            self.interaction_service,
            self.tenant_service,
            request.tenant_id,
            request.client_id,
        )
        user = await self.user_service.authenticate(
            request.email.strip(), request.password, tenant_id
        )
        tokens = await self.token_service.generate_tokens(user.id, application)
        return TokenPairResponse.from_pair(tokens)
