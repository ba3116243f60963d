"""Application (OAuth client) entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from zkey.domain.model.common import DomainModel, utc_now
from zkey.domain.value import (
    ApplicationId,
    AuthMethods,
    ProviderCredentials,
    TenantId,
)


class Application(DomainModel):
    """OAuth client registered by a tenant.

    Business rules:
    - ``client_id`` is globally unique
    - Redirect URIs are matched exactly, without prefix or wildcard matching
    - ``client_secret`` is only set for confidential clients
    - ``integrations`` override the tenant's provider credentials
    """

    id: ApplicationId
    tenant_id: TenantId
    name: str
    client_id: str
    client_secret: Optional[str] = None
    redirect_uris: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    logo: Optional[str] = None
    auth_methods: AuthMethods = AuthMethods()
    integrations: ProviderCredentials = ProviderCredentials()
    refresh_token_ttl_days: Optional[int] = Field(default=None, gt=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_confidential(self) -> bool:
        """Whether the client authenticates with a secret."""
        return bool(self.client_secret)
