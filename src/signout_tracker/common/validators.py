from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str | None, message: str) -> str:
    if not value or not value.strip():
        raise ValidationError(message)
    return value.strip()


def require_int(value, message: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(message)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(message)
