"""Strongly typed identifiers for ZKey domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

TenantId = NewType("TenantId", UUID)
ApplicationId = NewType("ApplicationId", UUID)
UserId = NewType("UserId", UUID)
UserIdentityId = NewType("UserIdentityId", UUID)
InteractionId = NewType("InteractionId", UUID)
RefreshTokenId = NewType("RefreshTokenId", UUID)
