"""Logfire setup and instrumentation.

Services open spans named ``<service>.<operation>`` and log events with
keyword attributes. OTP codes, wallet nonces, signatures and raw tokens
are never passed as attributes; the extra scrubbing patterns below catch
them if one slips through.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from zkey import __version__
from zkey.config import Settings

SERVICE_NAME = "zkey-auth"

# Added to logfire's defaults (password, secret, api_key, jwt, ...)
SCRUB_PATTERNS = ["otp", "nonce", "signature", "refresh_token", "authorization_code"]


def should_send(settings: Settings) -> bool:
    """An explicit setting wins, otherwise send only when a token is present."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure logfire for the process.

    Args:
        settings: Application settings
    """
    send_to_logfire = should_send(settings)
    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=__version__,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def _request_attributes(request, attributes):
    # Query and body values may hold codes and secrets
    return {
        "method": request.method,
        "path": request.url.path,
        "client_host": request.client.host if request.client else None,
        "errors": attributes.get("errors"),
    }


def instrument_fastapi(app: FastAPI) -> None:
    """Trace requests without headers or parameter values."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued by the repositories."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace calls to the notification gateways."""
    logfire.instrument_httpx()
