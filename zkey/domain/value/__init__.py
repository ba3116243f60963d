"""Domain value objects for ZKey."""

from zkey.domain.value.identifiers import (
    ApplicationId,
    InteractionId,
    RefreshTokenId,
    TenantId,
    UserId,
    UserIdentityId,
)
from zkey.domain.value.types import (
    AuthMethods,
    EmailCredentials,
    IdentityProvider,
    InteractionType,
    OtpChannel,
    ProviderCredentials,
    SmsCredentials,
)

__all__ = [
    # Identifiers
    "ApplicationId",
    "InteractionId",
    "RefreshTokenId",
    "TenantId",
    "UserId",
    "UserIdentityId",
    # Types
    "AuthMethods",
    "EmailCredentials",
    "IdentityProvider",
    "InteractionType",
    "OtpChannel",
    "ProviderCredentials",
    "SmsCredentials",
]
