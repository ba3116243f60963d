"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zkey import __version__
from zkey.config import Settings
from zkey.interface.api.errors import register_exception_handlers
from zkey.interface.api.routes import auth, health, interaction, oauth, otp, wallet
from zkey.util.di.container import create_container, setup_di
from zkey.util.observability import instrument_fastapi, instrument_httpx


def create_app(
    container: AsyncContainer | None = None, settings: Settings | None = None
) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it without exporting anything.

    Args:
        container: DI container, the production one when omitted
        settings: Settings, loaded from the environment when omitted

    Raises:
        ConfigurationError: If production runs with development defaults
    """
    settings = settings or Settings()

    settings.check_production_secrets()

    app_instance = FastAPI(
        title="ZKey Auth",
        description="Multi-tenant authentication broker: passwords, one-time codes, wallet signatures and OAuth 2.0 / OpenID Connect",
        version=__version__,
    )

    if settings.environment != "test":
        # Logfire must be configured before instrumentation
        instrument_httpx()
        instrument_fastapi(app_instance)

    # The hosted login surface calls the interaction and OTP endpoints
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.login_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())
    register_exception_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(otp.router)
    app_instance.include_router(wallet.router)
    app_instance.include_router(oauth.router)
    app_instance.include_router(interaction.router)

    return app_instance
