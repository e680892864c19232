from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    STAFF = "staff"


class IncomeType(str, Enum):
    """The six cash-movement categories an income entry can carry."""

    INCOME_ADD = "Income Add"
    INCOME_MINUS = "Income Minus"
    INCOME_PAYMENT = "Income Payment"
    OTP_ADD = "OTP Add"
    OTP_MINUS = "OTP Minus"
    OTP_PAYMENT = "OTP Payment"


class TripType(str, Enum):
    ONE_WAY = "1 Way"
    RETURN = "Return"


class TicketStatus(str, Enum):
    """Ticket lifecycle status stored in the database."""

    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
