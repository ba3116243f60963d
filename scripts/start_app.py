#!/usr/bin/env python3
"""Serve the ZKey API with uvicorn.

Usage:
    python scripts/start_app.py                 # host and port from settings
    python scripts/start_app.py --port 9000 --reload
"""

import argparse
import sys

import logfire
import uvicorn

from zkey.config import ConfigurationError, Settings
from zkey.util.logging import setup_logging
from zkey.util.observability import configure_logfire


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the ZKey auth API")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    parser.add_argument("--port", type=int, default=None, help="Defaults to PORT")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args(argv)

    settings = Settings()
    # Before anything else so startup failures are reported
    configure_logfire(settings)
    setup_logging(settings)

    try:
        settings.check_production_secrets()
    except ConfigurationError as e:
        logfire.error("Refusing to start", error=str(e))
        return 1

    port = args.port or settings.port
    logfire.info(
        "Starting ZKey API", environment=settings.environment, port=port
    )
    uvicorn.run(
        "zkey.interface.api.app:create_app",
        factory=True,
        host=args.host,
        port=port,
        reload=args.reload,
        log_level="debug" if settings.debug else "info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
