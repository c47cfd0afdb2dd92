from __future__ import annotations

from enum import Enum


class SignoutStatus(str, Enum):
    """Status of a sign-out row, fixed when the row is written."""

    OUT = "OUT"
    IN = "IN"


class LoginStep(str, Enum):
    """Which of the two login panels is active."""

    SYSTEM_STEP = "system"
    USER_STEP = "user"
