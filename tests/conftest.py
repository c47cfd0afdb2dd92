from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from signout_tracker import create_app
from signout_tracker.container import Container
from signout_tracker.users.model import NcoUser, User
from signout_tracker.users.service import AuthService

SYSTEM_PASSWORD = "secret123"

# Cheap hashes keep the suite fast; check_password_hash reads the method from the hash.
_HASH_METHOD = "pbkdf2:sha256:1000"


def make_user(user_id: int, username: str, rank: str, full_name: str, *, password: str = "x", pin: str = "0000", is_active: bool = True) -> User:
    return User(
        id=user_id,
        username=username,
        password_hash=generate_password_hash(password, method=_HASH_METHOD),
        pin_hash=generate_password_hash(pin, method=_HASH_METHOD),
        rank=rank,
        full_name=full_name,
        is_active=is_active,
    )


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self.users_by_id = {u.id: u for u in users}
        self.last_login: list[int] = []

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users_by_id.values() if u.username == username), None)

    def list_ncos(self):
        rows = [u for u in self.users_by_id.values() if u.is_active and u.username != "admin"]
        rows.sort(key=lambda u: (u.rank, u.full_name))
        return [NcoUser(id=u.id, rank=u.rank, full_name=u.full_name) for u in rows]

    def touch_last_login(self, user_id: int) -> None:
        self.last_login.append(user_id)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 14, 9, 30, 0)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        [
            make_user(1, "admin", "SYS", "System", password=SYSTEM_PASSWORD),
            make_user(2, "ssg_lee", "SSG", "Lee", pin="2222"),
            make_user(3, "sgt_nguyen", "SGT", "Nguyen", pin="1111"),
            make_user(4, "sfc_retired", "SFC", "Retired", pin="3333", is_active=False),
        ]
    )


@pytest.fixture
def app(monkeypatch, users_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    container = Container(
        conn=None,
        users_repo=users_repo,
        auth_service=AuthService(users_repo),
    )
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


class FakeCursor:
    def __init__(self, rows=(), fail_with=None):
        self.executed = []
        self.rows = list(rows)
        self.fail_with = fail_with
        self.lastrowid = 0
        self.closed = False

    def execute(self, sql, params=()):
        if self.fail_with is not None:
            raise self.fail_with
        self.executed.append((" ".join(sql.split()), params))
        self.lastrowid += 1

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return list(self.rows)

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class FakeConnFactory:
    """Stands in for ``DatabaseConnection``; hands out one fresh connection per call."""

    def __init__(self, rows=(), fail_with=None):
        self.rows = rows
        self.fail_with = fail_with
        self.connections = []

    def connect(self, *, with_database=True):
        conn = FakeConnection(FakeCursor(self.rows, self.fail_with))
        self.connections.append(conn)
        return conn


@pytest.fixture
def conn_factory():
    return FakeConnFactory()
