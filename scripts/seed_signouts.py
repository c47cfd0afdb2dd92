"""Fill the signouts table with synthetic groups for manual testing.

The run writes the standard fixed count of 20 groups. ``--groups`` only
overrides that count for ad-hoc runs.

Running twice on the same day produces the same signout_id values
(the id only encodes the date and the group index).
"""
from __future__ import annotations

import argparse
import importlib
import logging

from dotenv import load_dotenv

from signout_tracker.common.logging_utils import setup_logging
from signout_tracker.config import get_settings_module
from signout_tracker.core.constants import DEFAULT_FIXTURE_GROUPS
from signout_tracker.database.connection import DBConfig, DatabaseConnection
from signout_tracker.signouts.fixtures import FixtureGenerator
from signout_tracker.signouts.mysql_signout_repository import MySQLSignoutRepository

logger = logging.getLogger("seed_signouts")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--groups", type=int, default=DEFAULT_FIXTURE_GROUPS, help="number of sign-out groups")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    rows = FixtureGenerator().populate(MySQLSignoutRepository(conn), count=args.groups)
    logger.info("%d row(s) written to %s", rows, conn.config.database)


if __name__ == "__main__":
    main()
