from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now()
