from __future__ import annotations

from typing import Protocol

from .model import SignoutRecord


class SignoutRepository(Protocol):
    def insert(self, record: SignoutRecord) -> int:
        raise NotImplementedError
