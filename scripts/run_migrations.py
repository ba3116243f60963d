#!/usr/bin/env python3
"""Apply Alembic migrations, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py 3c9d1e7a5b20
"""

import argparse
import sys

import logfire
from alembic import command
from alembic.config import Config

from zkey.config import Settings
from zkey.util.observability import configure_logfire


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Upgrade the ZKey database schema")
    parser.add_argument("revision", nargs="?", default="head")
    parser.add_argument("--config", default="alembic.ini", help="Alembic config file")
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config(args.config)
    with logfire.span("migrations.upgrade", revision=args.revision):
        try:
            command.upgrade(alembic_cfg, args.revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=args.revision,
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The service must not start against a half-migrated schema
            raise

    logfire.info("Database migrations applied", revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
