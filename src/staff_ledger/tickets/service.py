from __future__ import annotations

from ..common.owned_service import OwnedEntryService
from ..users.service import SessionUser
from .model import TicketEntry
from .repository import TicketRepository
from .schema import TicketEntryInput, TicketEntryPatch


class TicketService(OwnedEntryService):
    """Use case: staff register flight-ticket sales, admins review everyone's."""

    label = "ticket entry"

    def __init__(self, tickets: TicketRepository):
        super().__init__(tickets)

    def create(self, actor: SessionUser, data: TicketEntryInput) -> TicketEntry:
        return super().create(actor, data)

    def update(self, actor: SessionUser, entry_id: int, patch: TicketEntryPatch) -> TicketEntry:
        return super().update(actor, entry_id, patch)

    def attach_copy(self, actor: SessionUser, entry_id: int, *, url: str, file_name: str) -> TicketEntry:
        """Point an existing ticket at an uploaded copy."""

        patch = TicketEntryPatch.from_payload({"ticketCopyUrl": url, "ticketCopyFileName": file_name})
        return self.update(actor, entry_id, patch)
