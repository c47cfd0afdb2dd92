from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NcoUser, User


class UserRepository(Protocol):
    """Repository interface for accounts.

    Note: services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_ncos(self) -> Sequence[NcoUser]:
        raise NotImplementedError

    def touch_last_login(self, user_id: int) -> None:
        raise NotImplementedError
