from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")
_INT_RE = re.compile(r"^-?\d+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_iso_date(value: Any, field_name: str) -> str:
    """Accept 'YYYY-MM-DD' and return it unchanged (dates are compared as strings)."""
    text = require_non_empty(value, field_name)
    try:
        if not _DATE_RE.match(text):
            raise ValueError(text)
        datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")
    return text


def optional_iso_date(value: Any, field_name: str) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_iso_date(value, field_name)


def require_clock_time(value: Any, field_name: str) -> str:
    text = require_non_empty(value, field_name)
    try:
        if not _TIME_RE.match(text):
            raise ValueError(text)
        datetime.strptime(text, "%H:%M:%S" if len(text) == 8 else "%H:%M")
    except ValueError:
        raise ValidationError(f"{field_name} must be a time in HH:MM format")
    return text


def require_int(value: Any, field_name: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a whole number")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INT_RE.match(value.strip()):
        return int(value.strip())
    raise ValidationError(f"{field_name} must be a whole number")


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Expected a text value")
    value = value.strip()
    return value or None


def require_choice(value: Any, enum_cls, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")
