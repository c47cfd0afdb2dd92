from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from signout_tracker.common.logging_utils import setup_logging
from signout_tracker.config import get_settings_module
from signout_tracker.database.bootstrap import apply_schema, list_tables
from signout_tracker.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    apply_schema(conn)
    cfg = conn.config
    logger.info(
        "OK: Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        cfg.user, cfg.host, cfg.port, cfg.database, len(list_tables(conn)),
    )


if __name__ == "__main__":
    main()
