"""User identity entity.

Links external credential namespaces (wallet public keys) to user accounts.
"""

from datetime import datetime

from pydantic import Field

from zkey.domain.model.common import DomainModel, utc_now
from zkey.domain.value import IdentityProvider, UserId, UserIdentityId


class UserIdentity(DomainModel):
    """External identity linked to a user account.

    ``(provider, provider_id)`` is unique across all users.
    """

    id: UserIdentityId
    user_id: UserId
    provider: IdentityProvider
    provider_id: str  # e.g. Stellar public key
    created_at: datetime = Field(default_factory=utc_now)
