"""Bearer token authentication for routes."""

from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from zkey.domain.error import UnauthorizedError
from zkey.domain.service import TokenService
from zkey.domain.value import UserId

bearer_scheme = HTTPBearer(auto_error=False)


def require_user(
    credentials: HTTPAuthorizationCredentials | None, token_service: TokenService
) -> UserId:
    """Return the subject of a valid bearer access token.

    Raises:
        UnauthorizedError: If the header is missing or the token is invalid
    """
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    return token_service.authenticate_access_token(credentials.credentials)


def optional_user(
    credentials: HTTPAuthorizationCredentials | None, token_service: TokenService
) -> UserId | None:
    """Like ``require_user``, but anonymous callers yield None.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    return token_service.authenticate_access_token(credentials.credentials)
