from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import IncomeType


@dataclass(frozen=True)
class IncomeEntry:
    """Domain entity: one income/OTP cash movement logged by a staff member."""

    entry_id: int
    user_id: int
    user_name: str
    date: str
    time: str
    type: IncomeType
    amount: int
    description: str
    recipient: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_api(self) -> dict:
        return {
            "id": self.entry_id,
            "userId": self.user_id,
            "userName": self.user_name,
            "date": self.date,
            "time": self.time,
            "type": self.type.value,
            "amount": self.amount,
            "description": self.description,
            "recipient": self.recipient,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
