# src/campus_market/scripts/migrate.py
from __future__ import annotations

import argparse
import logging
import os

from alembic import command
from alembic.config import Config

from campus_market.core.logging import configure_logging
from campus_market.core.settings import settings
from campus_market.db.session import create_tables

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))

logger = logging.getLogger(__name__)


def run_upgrade_head() -> None:
    """Apply every migration up to head against the configured database."""
    cfg = Config(os.path.join(PROJECT_ROOT, "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    cfg.set_main_option("script_location", os.path.join(PROJECT_ROOT, "migrations"))
    command.upgrade(cfg, "head")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Bring the database schema up to date.")
    parser.add_argument(
        "--create-all",
        action="store_true",
        help="create tables straight from the models instead of running migrations (local SQLite only)",
    )
    args = parser.parse_args(argv)

    configure_logging()
    if args.create_all:
        logger.info("Creating tables on %s", settings.database_url_sync)
        create_tables()
    else:
        logger.info("Upgrading %s to head", settings.database_url_sync)
        run_upgrade_head()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
