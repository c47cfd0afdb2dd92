from __future__ import annotations

import pytest
import requests

from signout_tracker.core.exceptions import AuthRejected, TransportError
from signout_tracker.login.api_client import AuthApiClient
from signout_tracker.users.model import NcoUser

BASE = "http://signouts.local"


class FakeResponse:
    def __init__(self, status_code=200, body=None, *, json_error=False):
        self.status_code = status_code
        self._body = body
        self._json_error = json_error

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._json_error:
            raise ValueError("not json")
        return self._body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse(200, {})
        self.error = error
        self.requests = []

    def request(self, method, url, json=None):
        self.requests.append((method, url, json))
        if self.error:
            raise self.error
        return self.response


def _client(**kwargs):
    session = FakeSession(**kwargs)
    return AuthApiClient(BASE + "/", session=session), session


def test_check_session_reads_flags():
    client, session = _client(response=FakeResponse(200, {"authenticated": False, "systemAuthenticated": True}))

    status = client.check_session()

    assert session.requests == [("GET", f"{BASE}/api/signouts/auth/check", None)]
    assert status.authenticated is False
    assert status.system_authenticated is True


def test_login_system_posts_password():
    client, session = _client(response=FakeResponse(200, {"success": True}))

    client.login_system("secret123")

    assert session.requests == [("POST", f"{BASE}/api/signouts/auth/system", {"password": "secret123"})]


def test_login_system_rejection_carries_server_error():
    client, _ = _client(response=FakeResponse(401, {"error": "Invalid system password"}))

    with pytest.raises(AuthRejected) as exc:
        client.login_system("nope")

    assert exc.value.message == "Invalid system password"
    assert exc.value.status_code == 401


def test_success_false_is_a_rejection_even_with_200():
    client, _ = _client(response=FakeResponse(200, {"success": False}))

    with pytest.raises(AuthRejected) as exc:
        client.login_system("nope")
    assert exc.value.message is None


def test_non_json_body_is_a_transport_error():
    client, _ = _client(response=FakeResponse(502, json_error=True))

    with pytest.raises(TransportError):
        client.login_system("secret123")


def test_connection_error_is_a_transport_error():
    client, _ = _client(error=requests.ConnectionError("refused"))

    with pytest.raises(TransportError):
        client.check_session()


def test_fetch_users_parses_list():
    body = [{"id": 2, "rank": "SSG", "full_name": "Lee"}, {"id": 3, "rank": "SGT", "full_name": "Nguyen"}]
    client, _ = _client(response=FakeResponse(200, body))

    assert client.fetch_users() == [NcoUser(2, "SSG", "Lee"), NcoUser(3, "SGT", "Nguyen")]


def test_fetch_users_unauthorized():
    client, _ = _client(response=FakeResponse(401, {"error": "System authentication required"}))

    with pytest.raises(AuthRejected, match="System authentication required"):
        client.fetch_users()


def test_fetch_users_malformed_entry():
    client, _ = _client(response=FakeResponse(200, [{"id": 2}]))

    with pytest.raises(TransportError):
        client.fetch_users()


def test_login_user_sends_numeric_id():
    client, session = _client(response=FakeResponse(200, {"success": True, "user": {"id": 2}}))

    assert client.login_user("2", "2222") == {"id": 2}
    assert session.requests[0][2] == {"userId": 2, "pin": "2222"}
