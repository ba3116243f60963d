"""Tenant entity.

A tenant is an organization boundary owning applications, users and the
default notification provider credentials.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from zkey.domain.model.common import DomainModel, utc_now
from zkey.domain.value import ProviderCredentials, TenantId


class Tenant(DomainModel):
    """Organization owning applications and users.

    Created by platform operators and rarely mutated.
    """

    id: TenantId
    name: str
    slug: str
    logo: Optional[str] = None
    login_url: Optional[str] = None  # Hosted login surface override
    integrations: ProviderCredentials = ProviderCredentials()
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
