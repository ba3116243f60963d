"""Tenant and application registry domain service."""

from typing import Callable, Sequence, TypeVar

import logfire

from zkey.domain.error import NotFoundError
from zkey.domain.model import Application, Tenant
from zkey.domain.repository import ApplicationRepository, TenantRepository
from zkey.domain.value import (
    EmailCredentials,
    ProviderCredentials,
    SmsCredentials,
    TenantId,
)

from .base import Service

T = TypeVar("T")


def resolve_credentials(
    tiers: Sequence[ProviderCredentials],
    select: Callable[[ProviderCredentials], T | None],
) -> T | None:
    """Return the first complete credential set across ordered tiers.

    Args:
        tiers: Credential sources, most specific first
        select: Extracts a complete credential set from one tier, or None

    Returns:
        The first non-None credential set, None if no tier configures one
    """
    for tier in tiers:
        credentials = select(tier)
        if credentials is not None:
            return credentials
    return None


class TenantService(Service):
    """Domain service resolving OAuth clients, tenants and their credentials."""

    def __init__(
        self,
        tenant_repository: TenantRepository,
        application_repository: ApplicationRepository,
    ) -> None:
        """Initialize tenant service.

        Args:
            tenant_repository: Tenant repository
            application_repository: Application repository
        """
        self.tenant_repository = tenant_repository
        self.application_repository = application_repository

    async def get_application(self, client_id: str) -> Application | None:
        """Get application by OAuth client ID.

        Args:
            client_id: OAuth client identifier

        Returns:
            Application if found, None otherwise
        """
        with logfire.span("tenant_service.get_application", client_id=client_id):
            application = await self.application_repository.find_by_client_id(
                client_id
            )
            if not application:
                logfire.warn("Application not found", client_id=client_id)
            return application

    async def get_tenant(self, tenant_id: TenantId) -> Tenant:
        """Get tenant by ID.

        Raises:
            NotFoundError: If tenant not found
        """
        with logfire.span("tenant_service.get_tenant", tenant_id=str(tenant_id)):
            tenant = await self.tenant_repository.find_by_id(tenant_id)
            if not tenant:
                logfire.warn("Tenant not found", tenant_id=str(tenant_id))
                raise NotFoundError("Tenant", str(tenant_id))
            return tenant

    async def resolve_client(self, client_id: str) -> tuple[Application, Tenant]:
        """Resolve an application and its owning tenant.

        Args:
            client_id: OAuth client identifier

        Returns:
            Tuple of (application, tenant)

        Raises:
            NotFoundError: If no application matches the client ID
        """
        application = await self.get_application(client_id)
        if not application:
            raise NotFoundError("Application", client_id)
        tenant = await self.get_tenant(application.tenant_id)
        return application, tenant

    @staticmethod
    def is_redirect_uri_registered(application: Application, redirect_uri: str) -> bool:
        """Exact membership test; no prefix, wildcard or normalization."""
        return redirect_uri in application.redirect_uris

    @staticmethod
    def credential_tiers(
        application: Application, tenant: Tenant
    ) -> list[ProviderCredentials]:
        """Credential sources in resolution order: application, then tenant."""
        return [application.integrations, tenant.integrations]

    def resolve_email_credentials(
        self, application: Application, tenant: Tenant
    ) -> EmailCredentials | None:
        """Resolve email gateway credentials for an application."""
        return resolve_credentials(
            self.credential_tiers(application, tenant), ProviderCredentials.email
        )

    def resolve_sms_credentials(
        self, application: Application, tenant: Tenant
    ) -> SmsCredentials | None:
        """Resolve SMS gateway credentials for an application."""
        return resolve_credentials(
            self.credential_tiers(application, tenant), ProviderCredentials.sms
        )
