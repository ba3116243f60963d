"""Exception handlers mapping domain and adapter errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from zkey.adapter.error import ProviderError
from zkey.domain.error import (
    ConflictError,
    NotFoundError,
    OAuthError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _detail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _detail(status.HTTP_400_BAD_REQUEST, str(exc))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _detail(status.HTTP_404_NOT_FOUND, str(exc))


async def handle_conflict(request: Request, exc: ConflictError) -> JSONResponse:
    return _detail(status.HTTP_409_CONFLICT, str(exc))


async def handle_unauthorized(request: Request, exc: UnauthorizedError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc)},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def handle_oauth_error(request: Request, exc: OAuthError) -> JSONResponse:
    """OAuth 2.0 error response (RFC 6749 section 5.2)."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": exc.error, "error_description": str(exc)},
    )


async def handle_provider_error(request: Request, exc: ProviderError) -> JSONResponse:
    logger.error(
        f"Provider failure: provider={exc.provider}, status={exc.status_code}, path={request.url.path}"
    )
    return _detail(status.HTTP_502_BAD_GATEWAY, "Notification provider unavailable")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error mapping on the application.

    Handlers are looked up along the exception's MRO, so subclasses such
    as ``InvalidOrExpiredCodeError`` resolve to their base's handler.
    """
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(ConflictError, handle_conflict)
    app.add_exception_handler(UnauthorizedError, handle_unauthorized)
    app.add_exception_handler(OAuthError, handle_oauth_error)
    app.add_exception_handler(ProviderError, handle_provider_error)
