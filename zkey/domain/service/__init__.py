"""Domain services."""

from .base import Service
from .interaction_service import InteractionService
from .notification_service import EmailGateway, NotificationService, SmsGateway
from .oauth_service import InteractionView, OAuthService, TokenGrant
from .otp_service import OtpService
from .tenant_service import TenantService
from .token_service import MintedTokens, TokenPair, TokenService
from .user_identity_service import UserIdentityService
from .user_service import UserService
from .wallet_service import SignatureVerifier, WalletService

__all__ = [
    "EmailGateway",
    "InteractionService",
    "InteractionView",
    "NotificationService",
    "OAuthService",
    "OtpService",
    "Service",
    "SignatureVerifier",
    "SmsGateway",
    "TenantService",
    "TokenGrant",
    "MintedTokens",
    "TokenPair",
    "TokenService",
    "UserIdentityService",
    "UserService",
    "WalletService",
]
