from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..common.access import EntryFilter
from .model import TicketEntry
from .schema import TicketEntryInput


class TicketRepository(Protocol):
    """Single-row operations take an optional owner_id; when given, the row must also belong to it."""

    def create(self, *, user_id: int, user_name: str, data: TicketEntryInput) -> int:
        raise NotImplementedError

    def get(self, entry_id: int, *, owner_id: Optional[int] = None) -> Optional[TicketEntry]:
        raise NotImplementedError

    def list(self, flt: EntryFilter) -> Sequence[TicketEntry]:
        """Ordered by issue date DESC."""
        raise NotImplementedError

    def update(self, entry_id: int, changes: dict, *, owner_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def delete(self, entry_id: int, *, owner_id: Optional[int] = None) -> bool:
        raise NotImplementedError
