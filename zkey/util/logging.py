"""Standard library logging setup.

Application events go through logfire. This only tunes the stdlib loggers
used by uvicorn, SQLAlchemy and httpx so their output matches the
environment.
"""

import logging
import sys

from zkey.config import Settings

_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the current environment.

    Args:
        settings: Application settings
    """
    if settings.debug:
        level = logging.DEBUG
    elif settings.environment == "production":
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        stream=sys.stdout,
        force=True,
    )

    # SQL echo is enabled in debug mode, keep it visible there
    for name in _QUIET_LOGGERS:
        if not (settings.debug and name == "sqlalchemy.engine"):
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
