"""Tenant resolution shared by registration and password login."""

from uuid import UUID

import logfire

from zkey.domain.error import NotFoundError, ValidationError
from zkey.domain.model import Application
from zkey.domain.service import InteractionService, TenantService
from zkey.domain.value import TenantId


async def resolve_tenant_scope(
    interaction_service: InteractionService,
    tenant_service: TenantService,
    tenant_id: str | None,
    client_reference: str | None,
) -> tuple[TenantId, Application | None]:
    """Resolve the tenant a request acts in.

    An explicit tenant ID wins. Otherwise the tenant of the application named
    by ``client_reference`` is used; the reference may be a client ID or the
    ID of an interaction carrying one.

    Returns:
        Tuple of (tenant ID, application the reference resolved to, if any)

    Raises:
        ValidationError: If neither input resolves to a tenant
    """
    if tenant_id and tenant_id.strip():
        try:
            resolved = TenantId(UUID(tenant_id.strip()))
        except ValueError:
            raise ValidationError("tenantId must be a UUID")
        try:
            await tenant_service.get_tenant(resolved)
        except NotFoundError:
            raise ValidationError("Unknown tenantId")
        return resolved, None

    if client_reference:
        client_id = await interaction_service.resolve_client_id(client_reference)
        application = await tenant_service.get_application(client_id)
        if application:
            return application.tenant_id, application

    logfire.warn("Tenant scope could not be resolved")
    raise ValidationError("tenantId (or interactionId/clientId) is required")
