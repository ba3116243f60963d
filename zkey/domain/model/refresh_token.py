"""Refresh token record.

Only a hash of the issued refresh token is stored, never the raw value.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from zkey.domain.model.common import DomainModel, utc_now
from zkey.domain.value import RefreshTokenId, UserId


class RefreshToken(DomainModel):
    """Persisted record of an issued refresh token."""

    id: RefreshTokenId
    user_id: UserId
    client_id: Optional[str] = None
    token_hash: str
    scopes: list[str] = Field(default_factory=list)
    expires_at: datetime
    created_at: datetime = Field(default_factory=utc_now)
