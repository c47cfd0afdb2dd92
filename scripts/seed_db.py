from __future__ import annotations

import importlib
import logging
import os

from dotenv import load_dotenv

from signout_tracker.common.logging_utils import setup_logging
from signout_tracker.config import get_settings_module
from signout_tracker.database.bootstrap import ensure_demo_users
from signout_tracker.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("seed_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    system_password = os.getenv("SYSTEM_PASSWORD")
    if not system_password:
        raise SystemExit("Set SYSTEM_PASSWORD before seeding accounts.")

    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    ensure_demo_users(conn, system_password=system_password)
    cfg = conn.config
    logger.info("OK: Seeded accounts -> %s@%s:%s/%s", cfg.user, cfg.host, cfg.port, cfg.database)


if __name__ == "__main__":
    main()
