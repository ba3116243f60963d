"""JWT token utilities."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

import jwt
from pydantic import BaseModel

from zkey.config import AuthSettings

TokenType = Literal["access", "refresh"]


class TokenPayload(BaseModel):
    """Decoded access or refresh token payload."""

    sub: str
    type: TokenType
    iat: datetime
    exp: datetime
    jti: str | None = None
    client_id: str | None = None


class JWTError(Exception):
    """JWT-related error."""

    pass


def _encode(claims: dict[str, Any], settings: AuthSettings) -> str:
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(
    user_id: str, settings: AuthSettings, now: datetime | None = None
) -> str:
    """Create a short-lived access token for the user.

    Args:
        user_id: User ID, carried as ``sub``
        settings: Authentication settings
        now: Issue time (defaults to the current UTC time)

    Returns:
        Encoded JWT token
    """
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=settings.access_token_ttl_seconds),
    }
    return _encode(claims, settings)


def create_refresh_token(
    user_id: str,
    settings: AuthSettings,
    expires_at: datetime,
    client_id: str | None = None,
    now: datetime | None = None,
) -> str:
    """Create a refresh token for the user.

    A random ``jti`` makes every token unique, so two tokens issued to the
    same user within the same second never share a hash.

    Args:
        user_id: User ID, carried as ``sub``
        settings: Authentication settings
        expires_at: Expiry of the token
        client_id: OAuth client the token was issued to, if any
        now: Issue time (defaults to the current UTC time)

    Returns:
        Encoded JWT token
    """
    claims: dict[str, Any] = {
        "sub": user_id,
        "type": "refresh",
        "jti": uuid.uuid4().hex,
        "iat": now or datetime.now(timezone.utc),
        "exp": expires_at,
    }
    if client_id:
        claims["client_id"] = client_id
    return _encode(claims, settings)


def create_id_token(claims: dict[str, Any], settings: AuthSettings) -> str:
    """Sign a prepared set of OpenID Connect ID token claims.

    Args:
        claims: Claims including ``sub``, ``aud``, ``iss``, ``iat`` and ``exp``
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    return _encode(claims, settings)


def verify_token(
    token: str, settings: AuthSettings, expected_type: TokenType = "access"
) -> TokenPayload:
    """Verify and decode an access or refresh token.

    Args:
        token: JWT token to verify
        settings: Authentication settings
        expected_type: Token type the caller accepts

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid, expired or of the wrong type
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")

    if payload.get("type") != expected_type:
        raise JWTError("Invalid token type")
    return TokenPayload(**payload)
