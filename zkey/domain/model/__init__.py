"""Domain model entities for ZKey."""

from zkey.domain.model.application import Application
from zkey.domain.model.interaction import (
    Interaction,
    InteractionDetails,
    OidcLoginDetails,
    OtpDetails,
    WalletChallengeDetails,
)
from zkey.domain.model.refresh_token import RefreshToken
from zkey.domain.model.tenant import Tenant
from zkey.domain.model.user import User
from zkey.domain.model.user_identity import UserIdentity

__all__ = [
    "Application",
    "Interaction",
    "InteractionDetails",
    "OidcLoginDetails",
    "OtpDetails",
    "RefreshToken",
    "Tenant",
    "User",
    "UserIdentity",
    "WalletChallengeDetails",
]
