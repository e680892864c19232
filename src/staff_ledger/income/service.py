from __future__ import annotations

from ..common.owned_service import OwnedEntryService
from ..users.service import SessionUser
from .model import IncomeEntry
from .repository import IncomeRepository
from .schema import IncomeEntryInput, IncomeEntryPatch


class IncomeService(OwnedEntryService):
    """Use case: staff log income/OTP movements, admins review everyone's."""

    label = "income entry"

    def __init__(self, income: IncomeRepository):
        super().__init__(income)

    def create(self, actor: SessionUser, data: IncomeEntryInput) -> IncomeEntry:
        return super().create(actor, data)

    def update(self, actor: SessionUser, entry_id: int, patch: IncomeEntryPatch) -> IncomeEntry:
        return super().update(actor, entry_id, patch)
