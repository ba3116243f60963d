"""Token issuance domain service.

Mints access tokens, refresh tokens (persisted only as a SHA-256 digest)
and OpenID Connect ID tokens.
"""

import hashlib
from dataclasses import dataclass
from datetime import timedelta
from typing import Any
from uuid import UUID, uuid4

import logfire

from zkey.config import AuthSettings
from zkey.domain.error import UnauthorizedError
from zkey.domain.model import Application, RefreshToken, User
from zkey.domain.repository import RefreshTokenRepository
from zkey.domain.value import RefreshTokenId, UserId
from zkey.util.jwt import (
    JWTError,
    create_access_token,
    create_id_token,
    create_refresh_token,
    verify_token,
)

from .base import Clock, Service, utcnow


@dataclass(frozen=True)
class TokenPair:
    """Access and refresh token issued together."""

    access_token: str
    refresh_token: str
    expires_in: int


@dataclass(frozen=True)
class MintedTokens:
    """Signed tokens whose refresh row has not been stored yet."""

    pair: TokenPair
    record: RefreshToken


def hash_token(token: str) -> str:
    """Irreversible digest stored in place of a raw refresh token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class TokenService(Service):
    """Domain service for token issuance."""

    def __init__(
        self,
        auth_settings: AuthSettings,
        refresh_token_repository: RefreshTokenRepository,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize token service.

        Args:
            auth_settings: Authentication settings
            refresh_token_repository: Refresh token repository
            clock: Source of the current time
        """
        self.auth_settings = auth_settings
        self.refresh_token_repository = refresh_token_repository
        self.clock = clock

    def mint_tokens(
        self,
        user_id: UserId,
        application: Application | None = None,
        scopes: list[str] | None = None,
    ) -> MintedTokens:
        """Sign an access/refresh token pair without storing anything.

        Callers that still have to win a race before the issuance counts
        store the refresh row afterwards with ``record_refresh_token``.

        The refresh lifetime comes from the application when it overrides it,
        otherwise from settings.
        """
        client_id = application.client_id if application else None
        now = self.clock()
        ttl_days = (
            application.refresh_token_ttl_days
            if application and application.refresh_token_ttl_days
            else self.auth_settings.refresh_token_ttl_days
        )
        expires_at = now + timedelta(days=ttl_days)

        access_token = create_access_token(str(user_id), self.auth_settings, now=now)
        refresh_token = create_refresh_token(
            str(user_id),
            self.auth_settings,
            expires_at=expires_at,
            client_id=client_id,
            now=now,
        )
        return MintedTokens(
            pair=TokenPair(
                access_token=access_token,
                refresh_token=refresh_token,
                expires_in=self.auth_settings.access_token_ttl_seconds,
            ),
            record=RefreshToken(
                id=RefreshTokenId(uuid4()),
                user_id=user_id,
                client_id=client_id,
                token_hash=hash_token(refresh_token),
                scopes=scopes or [],
                expires_at=expires_at,
                created_at=now,
            ),
        )

    async def record_refresh_token(self, minted: MintedTokens) -> TokenPair:
        """Store the refresh row of minted tokens and hand out the pair."""
        await self.refresh_token_repository.save(minted.record)
        logfire.info(
            "Tokens issued",
            user_id=str(minted.record.user_id),
            client_id=minted.record.client_id,
            expires_at=minted.record.expires_at.isoformat(),
        )
        return minted.pair

    async def generate_tokens(
        self,
        user_id: UserId,
        application: Application | None = None,
        scopes: list[str] | None = None,
    ) -> TokenPair:
        """Issue an access/refresh token pair and record the refresh token.

        Args:
            user_id: Subject of the tokens
            application: OAuth client the tokens are issued to, if any
            scopes: Scopes recorded on the refresh token row

        Returns:
            The issued token pair
        """
        client_id = application.client_id if application else None
        with logfire.span(
            "token_service.generate_tokens", user_id=str(user_id), client_id=client_id
        ):
            minted = self.mint_tokens(user_id, application, scopes)
            return await self.record_refresh_token(minted)

    def generate_id_token(
        self, user: User, client_id: str, nonce: str | None = None
    ) -> str:
        """Build and sign an OpenID Connect ID token.

        Args:
            user: Authenticated user
            client_id: Audience of the token
            nonce: Value echoed from the authorization request, omitted if None

        Returns:
            Signed ID token
        """
        with logfire.span(
            "token_service.generate_id_token", user_id=str(user.id), client_id=client_id
        ):
            now = self.clock()
            claims: dict[str, Any] = {
                "sub": str(user.id),
                "aud": client_id,
                "iss": self.auth_settings.issuer,
                "iat": now,
                "exp": now + timedelta(seconds=self.auth_settings.access_token_ttl_seconds),
                "email": user.primary_email,
                "given_name": user.first_name,
                "family_name": user.last_name,
            }
            if nonce is not None:
                claims["nonce"] = nonce
            if user.display_name:
                claims["name"] = user.display_name
            return create_id_token(claims, self.auth_settings)

    def authenticate_access_token(self, token: str) -> UserId:
        """Verify a bearer access token and return its subject.

        Raises:
            UnauthorizedError: If the token is invalid, expired or not an access token
        """
        try:
            payload = verify_token(token, self.auth_settings, expected_type="access")
            return UserId(UUID(payload.sub))
        except (JWTError, ValueError) as e:
            logfire.info("Access token rejected", error=str(e))
            raise UnauthorizedError("Invalid or expired token")
