from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from ..core.constants import SYSTEM_USERNAME
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

# (username, rank, full_name, pin)
DEMO_NCOS = (
    ("ssg_lee", "SSG", "Lee", "1234"),
    ("sfc_garcia", "SFC", "Garcia", "2345"),
    ("sgt_nguyen", "SGT", "Nguyen", "3456"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter (handles ';' inside quotes, skips '--' comment lines).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [ln for ln in sql.splitlines() if not ln.strip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s", conn_factory.config.database)


def ensure_demo_users(conn_factory: DatabaseConnection, *, system_password: str) -> None:
    """Upsert the system account and the demo NCO accounts."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(username: str, rank: str, full_name: str, password: str, pin: str) -> None:
            password_hash = generate_password_hash(password)
            pin_hash = generate_password_hash(pin)
            cur.execute("SELECT id FROM users WHERE username=%s", (username,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET password_hash=%s, pin_hash=%s, `rank`=%s, full_name=%s, is_active=1
                    WHERE username=%s
                    """,
                    (password_hash, pin_hash, rank, full_name, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (username, password_hash, pin_hash, `rank`, full_name)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (username, password_hash, pin_hash, rank, full_name),
                )

        # The system account only carries the shared password; its PIN is never used.
        upsert_user(SYSTEM_USERNAME, "SYS", "System", system_password, system_password)
        for username, rank, full_name, pin in DEMO_NCOS:
            upsert_user(username, rank, full_name, system_password, pin)

        conn.commit()
    finally:
        conn.close()
    logger.info("Demo accounts ready (%d NCOs)", len(DEMO_NCOS))


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
