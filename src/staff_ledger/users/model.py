from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no database access here.
    """

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    is_active: bool = True
    last_signed_in: Optional[datetime] = None

    def to_public(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.full_name,
            "username": self.username,
            "role": self.role.value,
            "lastSignedIn": self.last_signed_in.isoformat() if self.last_signed_in else None,
        }
