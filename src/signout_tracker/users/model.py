from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Stored account: either the system account or a selectable NCO.

    Note: Plain data object, no DB access here.
    """

    id: int
    username: str
    password_hash: str
    pin_hash: str
    rank: str
    full_name: str
    is_active: bool = True


@dataclass(frozen=True)
class NcoUser:
    """What the login screen lists after the system password is accepted."""

    id: int
    rank: str
    full_name: str

    @property
    def label(self) -> str:
        return f"{self.rank} {self.full_name}"

    def to_dict(self) -> dict:
        return {"id": self.id, "rank": self.rank, "full_name": self.full_name}
