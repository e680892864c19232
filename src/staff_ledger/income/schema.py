"""Request schema for income entries, shared by the HTTP layer and the service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import (
    optional_text,
    require_choice,
    require_clock_time,
    require_int,
    require_iso_date,
    require_non_empty,
)
from ..core.enums import IncomeType
from ..core.exceptions import ValidationError


def _amount(value: Any) -> int:
    amount = require_int(value, "amount")
    if amount < 0:
        # the category carries the sign
        raise ValidationError("amount must not be negative")
    return amount


# API field -> (column, parser)
_FIELDS = {
    "date": ("entry_date", lambda v: require_iso_date(v, "date")),
    "time": ("entry_time", lambda v: require_clock_time(v, "time")),
    "type": ("entry_type", lambda v: require_choice(v, IncomeType, "type")),
    "amount": ("amount", _amount),
    "description": ("description", lambda v: require_non_empty(v, "description")),
    "recipient": ("recipient", optional_text),
}


@dataclass(frozen=True)
class IncomeEntryInput:
    date: str
    time: str
    type: IncomeType
    amount: int
    description: str
    recipient: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "IncomeEntryInput":
        missing = [k for k in ("date", "time", "type", "amount", "description") if payload.get(k) is None]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")
        values = {name: parse(payload.get(name)) for name, (_, parse) in _FIELDS.items()}
        return cls(**values)

    def to_columns(self) -> dict:
        return {
            "entry_date": self.date,
            "entry_time": self.time,
            "entry_type": self.type,
            "amount": self.amount,
            "description": self.description,
            "recipient": self.recipient,
        }


@dataclass(frozen=True)
class IncomeEntryPatch:
    """Partial update: only the fields present in the payload are changed."""

    changes: dict

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "IncomeEntryPatch":
        changes: dict = {}
        for name, (column, parse) in _FIELDS.items():
            if name not in payload:
                continue
            value = payload[name]
            if value is None and name != "recipient":
                raise ValidationError(f"{name} cannot be null")
            changes[column] = parse(value)
        return cls(changes=changes)

    @property
    def is_empty(self) -> bool:
        return not self.changes
