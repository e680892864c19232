from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.access import EntryFilter
from .model import IncomeEntry
from .schema import IncomeEntryInput


class IncomeRepository(Protocol):
    """Single-row operations take an optional owner_id; when given, the row must also belong to it."""

    def create(self, *, user_id: int, user_name: str, data: IncomeEntryInput) -> int:
        raise NotImplementedError

    def get(self, entry_id: int, *, owner_id: Optional[int] = None) -> Optional[IncomeEntry]:
        raise NotImplementedError

    def list(self, flt: EntryFilter) -> Sequence[IncomeEntry]:
        """Ordered by date DESC, time DESC."""
        raise NotImplementedError

    def update(self, entry_id: int, changes: dict, *, owner_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def delete(self, entry_id: int, *, owner_id: Optional[int] = None) -> bool:
        raise NotImplementedError
