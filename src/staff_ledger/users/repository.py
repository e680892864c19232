from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, full_name: str, username: str, password_hash: str, role: Role) -> int:
        raise NotImplementedError

    def update_last_signed_in(self, user_id: int, *, signed_in_at: datetime) -> bool:
        raise NotImplementedError

    def update_password_hash(self, user_id: int, *, password_hash: str) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        """All users ordered by display name."""
        raise NotImplementedError
