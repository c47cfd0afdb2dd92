from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from signout_tracker.core.enums import SignoutStatus
from signout_tracker.signouts.model import SignoutRecord
from signout_tracker.signouts.mysql_signout_repository import MySQLSignoutRepository

OUT_AT = datetime(2026, 3, 14, 8, 0, 0)

INSERT_SQL = (
    "INSERT INTO signouts (signout_id, soldier_rank, soldier_first_name, soldier_last_name, "
    "soldier_dod_id, location, sign_out_time, sign_in_time, signed_out_by_id, signed_out_by_name, "
    "signed_in_by_id, signed_in_by_name, status, notes) "
    "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)"
)


def _in_record() -> SignoutRecord:
    return SignoutRecord(
        signout_id="SO260314-1001",
        soldier_rank="PVT",
        soldier_first_name="John",
        soldier_last_name="Doe",
        soldier_dod_id="1234567890",
        location="PX",
        sign_out_time=OUT_AT,
        sign_in_time=OUT_AT + timedelta(hours=2),
        signed_out_by_id=1,
        signed_out_by_name="LT Miller",
        signed_in_by_id=10,
        signed_in_by_name="SSG Lee",
        status=SignoutStatus.IN,
        notes="Filler test data",
    )


def _out_record() -> SignoutRecord:
    return SignoutRecord(
        signout_id="SO260314-1003",
        soldier_rank="SPC",
        soldier_first_name="Jane",
        soldier_last_name="Smith",
        soldier_dod_id="2345678901",
        location="Gym",
        sign_out_time=OUT_AT,
        sign_in_time=None,
        signed_out_by_id=10,
        signed_out_by_name="SSG Lee",
        signed_in_by_id=None,
        signed_in_by_name=None,
        status=SignoutStatus.OUT,
    )


def test_insert_binds_columns_in_declared_order(conn_factory):
    repo = MySQLSignoutRepository(conn_factory)

    row_id = repo.insert(_in_record())

    assert row_id == 1
    [(sql, params)] = conn_factory.connections[0]._cursor.executed
    assert sql == INSERT_SQL
    assert params == (
        "SO260314-1001",
        "PVT",
        "John",
        "Doe",
        "1234567890",
        "PX",
        OUT_AT,
        OUT_AT + timedelta(hours=2),
        1,
        "LT Miller",
        10,
        "SSG Lee",
        "IN",
        "Filler test data",
    )


def test_insert_sends_status_as_plain_string(conn_factory):
    repo = MySQLSignoutRepository(conn_factory)

    repo.insert(_out_record())

    [(_, params)] = conn_factory.connections[0]._cursor.executed
    status = params[12]
    assert status == "OUT"
    assert type(status) is str
    assert params[7] is None and params[10] is None and params[11] is None


def test_each_insert_uses_its_own_connection_and_commit(conn_factory):
    repo = MySQLSignoutRepository(conn_factory)

    repo.insert(_in_record())
    repo.insert(_out_record())

    assert len(conn_factory.connections) == 2
    for conn in conn_factory.connections:
        assert conn.commits == 1
        assert conn.rollbacks == 0
        assert conn.closed
        assert conn._cursor.closed


def test_failed_insert_rolls_back_and_closes(conn_factory):
    conn_factory.fail_with = RuntimeError("duplicate key")
    repo = MySQLSignoutRepository(conn_factory)

    with pytest.raises(RuntimeError, match="duplicate key"):
        repo.insert(_in_record())

    [conn] = conn_factory.connections
    assert conn.commits == 0
    assert conn.rollbacks == 1
    assert conn.closed
