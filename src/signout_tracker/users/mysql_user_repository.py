from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import SYSTEM_USERNAME
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NcoUser, User
from .repository import UserRepository

_USER_COLUMNS = "id, username, password_hash, pin_hash, `rank`, full_name, is_active"


def _to_user(row: dict) -> User:
    return User(
        id=int(row["id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        pin_hash=row["pin_hash"],
        rank=row["rank"],
        full_name=row["full_name"],
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_ncos(self) -> Sequence[NcoUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, `rank`, full_name
                FROM users
                WHERE is_active=1 AND username<>%s
                ORDER BY `rank`, full_name
                """,
                (SYSTEM_USERNAME,),
            )
            return [
                NcoUser(id=int(r["id"]), rank=r["rank"], full_name=r["full_name"])
                for r in fetchall(cur)
            ]

    def touch_last_login(self, user_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET last_login=NOW() WHERE id=%s", (user_id,))
