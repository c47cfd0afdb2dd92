from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from werkzeug.security import check_password_hash

from ..common.validators import require_int, require_non_empty
from ..core.constants import MSG_INVALID_PIN, MSG_INVALID_SYSTEM_PASSWORD, SYSTEM_USERNAME
from ..core.exceptions import AuthenticationError
from .model import NcoUser
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after the PIN step."""

    id: int
    rank: str
    full_name: str

    @property
    def username(self) -> str:
        return f"user_{self.id}"

    def to_dict(self) -> dict:
        return {"id": self.id, "rank": self.rank, "full_name": self.full_name, "username": self.username}


def _matches(stored_hash: str, candidate: str) -> bool:
    try:
        return check_password_hash(stored_hash, candidate)
    except (TypeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use cases behind the two login steps."""

    def __init__(self, users: UserRepository):
        self._users = users

    def verify_system_password(self, password: str) -> None:
        require_non_empty(password, "System password is required")

        system = self._users.get_by_username(SYSTEM_USERNAME)
        if not system or not system.is_active:
            raise AuthenticationError("System access not configured")
        if not _matches(system.password_hash, password):
            logger.info("Rejected system password attempt")
            raise AuthenticationError(MSG_INVALID_SYSTEM_PASSWORD)

    def list_users(self) -> Sequence[NcoUser]:
        return list(self._users.list_ncos())

    def verify_user_pin(self, user_id, pin: str) -> SessionUser:
        user_id = require_int(user_id, "Valid user ID is required")
        require_non_empty(pin, "PIN is required")

        user = self._users.get_by_id(user_id)
        if not user or not user.is_active or user.username == SYSTEM_USERNAME:
            raise AuthenticationError("User not found")
        if not _matches(user.pin_hash, pin):
            logger.info("Rejected PIN for user id=%s", user_id)
            raise AuthenticationError(MSG_INVALID_PIN)

        self._users.touch_last_login(user.id)
        return SessionUser(id=user.id, rank=user.rank, full_name=user.full_name)
