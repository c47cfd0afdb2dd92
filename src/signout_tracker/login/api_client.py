from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from ..core.constants import AUTH_API_PREFIX
from ..core.exceptions import AuthRejected, TransportError
from ..users.model import NcoUser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionStatus:
    authenticated: bool
    system_authenticated: bool
    user: Optional[dict] = None


class AuthApiClient:
    """JSON client for the sign-out auth endpoints.

    A ``requests.Session`` keeps the session cookie between calls. Non-2xx
    answers and ``success: false`` raise ``AuthRejected``; anything that keeps
    us from reading a JSON answer raises ``TransportError``. No timeouts, no
    retries.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self._base_url}{AUTH_API_PREFIX}{path}"

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> tuple[requests.Response, Any]:
        try:
            response = self._session.request(method, self._url(path), json=payload)
        except requests.RequestException as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(f"{method} {path} returned a non-JSON body") from e
        return response, body

    @staticmethod
    def _require_success(response: requests.Response, body: Any) -> dict:
        if not isinstance(body, dict):
            raise TransportError("Unexpected response shape")
        if not response.ok or not body.get("success"):
            raise AuthRejected(body.get("error"), status_code=response.status_code)
        return body

    def check_session(self) -> SessionStatus:
        _, body = self._request("GET", "/check")
        if not isinstance(body, dict):
            raise TransportError("Unexpected response shape")
        return SessionStatus(
            authenticated=bool(body.get("authenticated")),
            system_authenticated=bool(body.get("systemAuthenticated")),
            user=body.get("user"),
        )

    def login_system(self, password: str) -> None:
        response, body = self._request("POST", "/system", {"password": password})
        self._require_success(response, body)

    def fetch_users(self) -> list[NcoUser]:
        response, body = self._request("GET", "/users")
        if not response.ok:
            error = body.get("error") if isinstance(body, dict) else None
            raise AuthRejected(error or "Failed to load users", status_code=response.status_code)
        if not isinstance(body, list):
            raise TransportError("Unexpected response shape")
        try:
            return [NcoUser(id=int(u["id"]), rank=u["rank"], full_name=u["full_name"]) for u in body]
        except (KeyError, TypeError, ValueError) as e:
            raise TransportError("Malformed user list") from e

    def login_user(self, user_id: int, pin: str) -> dict:
        response, body = self._request("POST", "/user", {"userId": int(user_id), "pin": pin})
        return self._require_success(response, body).get("user") or {}

    def logout(self) -> None:
        self._request("POST", "/logout")
