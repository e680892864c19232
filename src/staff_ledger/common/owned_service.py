from __future__ import annotations

import logging
from typing import Any, Optional

from ..core.constants import UNKNOWN_USER_NAME
from ..core.exceptions import AuthorizationError, DatabaseUnavailableError, NotFoundError
from ..users.service import SessionUser
from .access import EntryFilter, owner_scope, scoped_filter

logger = logging.getLogger(__name__)


class OwnedEntryService:
    """Role-gated CRUD over entries that belong to one user.

    Admins reach every row. Staff reach only their own rows: ownership is part of
    the storage query, so a foreign or missing id simply matches nothing.
    """

    label = "entry"

    def __init__(self, repo: Any):
        self._repo = repo

    def create(self, actor: SessionUser, data) -> Any:
        entry_id = self._repo.create(user_id=actor.user_id, user_name=actor.full_name or UNKNOWN_USER_NAME, data=data)
        logger.info("user_id=%s created %s id=%s", actor.user_id, self.label, entry_id)
        return self._repo.get(entry_id)

    def list(
        self,
        actor: SessionUser,
        *,
        user_id: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list:
        flt = scoped_filter(actor, user_id=user_id, start_date=start_date, end_date=end_date)
        return self._safe_list(flt)

    def list_mine(self, actor: SessionUser, *, start_date: Optional[str] = None, end_date: Optional[str] = None) -> list:
        flt = scoped_filter(actor, start_date=start_date, end_date=end_date)
        return self._safe_list(EntryFilter(user_id=actor.user_id, start_date=flt.start_date, end_date=flt.end_date))

    def list_all(self, actor: SessionUser, *, start_date: Optional[str] = None, end_date: Optional[str] = None) -> list:
        if not actor.is_admin:
            raise AuthorizationError("Admin access required")
        return self.list(actor, start_date=start_date, end_date=end_date)

    def get(self, actor: SessionUser, entry_id: int) -> Any:
        entry = self._repo.get(entry_id, owner_id=owner_scope(actor))
        if entry is None:
            self._deny(actor, entry_id, "read")
        return entry

    def update(self, actor: SessionUser, entry_id: int, patch) -> Any:
        owner_id = owner_scope(actor)
        if patch.is_empty:
            return self.get(actor, entry_id)

        if not self._repo.update(entry_id, patch.changes, owner_id=owner_id):
            self._deny(actor, entry_id, "update")
        return self._repo.get(entry_id)

    def delete(self, actor: SessionUser, entry_id: int) -> None:
        if not self._repo.delete(entry_id, owner_id=owner_scope(actor)):
            self._deny(actor, entry_id, "delete")
        logger.info("user_id=%s deleted %s id=%s", actor.user_id, self.label, entry_id)

    def _safe_list(self, flt: EntryFilter) -> list:
        try:
            return list(self._repo.list(flt))
        except DatabaseUnavailableError:
            logger.warning("Cannot list %s rows: database not available", self.label)
            return []

    def _deny(self, actor: SessionUser, entry_id: int, action: str) -> None:
        if actor.is_admin:
            raise NotFoundError(f"{self.label.capitalize()} {entry_id} not found")
        logger.info("user_id=%s denied %s on %s id=%s", actor.user_id, action, self.label, entry_id)
        raise AuthorizationError("Not authorized")
