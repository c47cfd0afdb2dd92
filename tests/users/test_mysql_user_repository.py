from __future__ import annotations

from signout_tracker.users.model import NcoUser
from signout_tracker.users.mysql_user_repository import MySQLUserRepository


def test_list_ncos_excludes_system_account_and_maps_rows(conn_factory):
    conn_factory.rows = [
        {"id": 3, "rank": "SGT", "full_name": "Nguyen"},
        {"id": 2, "rank": "SSG", "full_name": "Lee"},
    ]
    repo = MySQLUserRepository(conn_factory)

    users = repo.list_ncos()

    assert users == [NcoUser(id=3, rank="SGT", full_name="Nguyen"), NcoUser(id=2, rank="SSG", full_name="Lee")]
    [(sql, params)] = conn_factory.connections[0]._cursor.executed
    assert "WHERE is_active=1 AND username<>%s" in sql
    assert sql.endswith("ORDER BY `rank`, full_name")
    assert params == ("admin",)


def test_get_by_id_returns_none_for_missing_row(conn_factory):
    repo = MySQLUserRepository(conn_factory)

    assert repo.get_by_id(99) is None
    [(sql, params)] = conn_factory.connections[0]._cursor.executed
    assert sql.endswith("FROM users WHERE id=%s")
    assert params == (99,)


def test_get_by_id_maps_row_to_user(conn_factory):
    conn_factory.rows = [
        {
            "id": 2,
            "username": "ssg_lee",
            "password_hash": "",
            "pin_hash": "pbkdf2:sha256:1000$x$y",
            "rank": "SSG",
            "full_name": "Lee",
            "is_active": 1,
        }
    ]
    repo = MySQLUserRepository(conn_factory)

    user = repo.get_by_id(2)

    assert user.username == "ssg_lee"
    assert user.rank == "SSG"
    assert user.is_active is True


def test_touch_last_login_commits(conn_factory):
    repo = MySQLUserRepository(conn_factory)

    repo.touch_last_login(2)

    [conn] = conn_factory.connections
    assert conn._cursor.executed == [("UPDATE users SET last_login=NOW() WHERE id=%s", (2,))]
    assert conn.commits == 1
