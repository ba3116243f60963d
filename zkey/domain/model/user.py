"""User aggregate root.

Users belong to at most one tenant and authenticate with a password,
a one-time password or a linked wallet.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from zkey.domain.model.common import DomainModel, utc_now
from zkey.domain.value import TenantId, UserId


class User(DomainModel):
    """User aggregate root.

    Email and phone are unique among active (non-deleted) users of a tenant.
    """

    id: UserId
    tenant_id: Optional[TenantId] = None  # None for platform-level identities
    primary_email: Optional[str] = None
    phone_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    wallet_address: Optional[str] = None
    password_hash: Optional[str] = None
    email_verified: bool = False
    phone_verified: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        """Whether the user has not been soft-deleted."""
        return self.deleted_at is None

    @property
    def display_name(self) -> Optional[str]:
        """First and last name joined, or None if both are empty."""
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or None
