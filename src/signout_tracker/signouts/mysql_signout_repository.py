from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import SignoutRecord
from .repository import SignoutRepository

_COLUMNS = (
    "signout_id",
    "soldier_rank",
    "soldier_first_name",
    "soldier_last_name",
    "soldier_dod_id",
    "location",
    "sign_out_time",
    "sign_in_time",
    "signed_out_by_id",
    "signed_out_by_name",
    "signed_in_by_id",
    "signed_in_by_name",
    "status",
    "notes",
)


class MySQLSignoutRepository(SignoutRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(self, record: SignoutRecord) -> int:
        # One connection and commit per row: a failing row does not undo earlier ones.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO signouts ({", ".join(_COLUMNS)})
                VALUES ({", ".join(["%s"] * len(_COLUMNS))})
                """,
                (
                    record.signout_id,
                    record.soldier_rank,
                    record.soldier_first_name,
                    record.soldier_last_name,
                    record.soldier_dod_id,
                    record.location,
                    record.sign_out_time,
                    record.sign_in_time,
                    record.signed_out_by_id,
                    record.signed_out_by_name,
                    record.signed_in_by_id,
                    record.signed_in_by_name,
                    record.status.value,
                    record.notes,
                ),
            )
            return int(cur.lastrowid)
