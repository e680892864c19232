from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import ValidationError
from ..users.service import SessionUser


@dataclass(frozen=True)
class EntryFilter:
    """Storage-level list filter. Dates are inclusive ISO strings."""

    user_id: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


def scoped_filter(
    actor: SessionUser,
    *,
    user_id: Optional[int] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> EntryFilter:
    """Admins may target any user (None = all users); everyone else sees only their own rows."""

    if start_date and end_date and start_date > end_date:
        raise ValidationError("startDate must not be after endDate")
    owner = user_id if actor.is_admin else actor.user_id
    return EntryFilter(user_id=owner, start_date=start_date, end_date=end_date)


def owner_scope(actor: SessionUser) -> Optional[int]:
    """Owner id that single-row operations must match; None lets admins reach any row."""

    return None if actor.is_admin else actor.user_id
