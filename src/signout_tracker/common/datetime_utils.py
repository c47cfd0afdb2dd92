from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time, truncated to whole seconds.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now().replace(microsecond=0)
