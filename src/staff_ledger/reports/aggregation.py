"""Dashboard aggregation: pure functions over the currently filtered entry lists.

Nothing here is persisted; callers recompute whenever the filter set changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..core.enums import IncomeType
from ..income.model import IncomeEntry
from ..tickets.model import TicketEntry


@dataclass(frozen=True)
class DashboardFilter:
    """Staff / year / month / free-text filter applied on top of a listed entry set."""

    user_id: Optional[int] = None
    year: Optional[int] = None
    month: Optional[int] = None
    search: Optional[str] = None

    def matches_date(self, iso_date: str) -> bool:
        if self.year is not None and iso_date[:4] != f"{self.year:04d}":
            return False
        if self.month is not None and iso_date[5:7] != f"{self.month:02d}":
            return False
        return True


@dataclass(frozen=True)
class Summary:
    category_totals: dict = field(default_factory=dict)
    total_income: int = 0
    total_otp: int = 0
    total_tickets: int = 0

    def to_api(self) -> dict:
        return {
            "totalIncome": self.total_income,
            "totalOTP": self.total_otp,
            "totalTickets": self.total_tickets,
            "categories": {t.value: self.category_totals.get(t, 0) for t in IncomeType},
        }


def category_totals(entries: Iterable[IncomeEntry]) -> dict:
    totals = {t: 0 for t in IncomeType}
    for e in entries:
        totals[e.type] += int(e.amount)
    return totals


def summarize(income: Sequence[IncomeEntry], tickets: Sequence[TicketEntry]) -> Summary:
    """Net = additions - (deductions + payments), per income and OTP bucket."""

    totals = category_totals(income)
    net_income = totals[IncomeType.INCOME_ADD] - (totals[IncomeType.INCOME_MINUS] + totals[IncomeType.INCOME_PAYMENT])
    net_otp = totals[IncomeType.OTP_ADD] - (totals[IncomeType.OTP_MINUS] + totals[IncomeType.OTP_PAYMENT])
    return Summary(category_totals=totals, total_income=net_income, total_otp=net_otp, total_tickets=len(tickets))


def _contains(needle: str, *haystack: Optional[str]) -> bool:
    return any(needle in (h or "").lower() for h in haystack)


def filter_income_entries(entries: Iterable[IncomeEntry], flt: DashboardFilter) -> list[IncomeEntry]:
    needle = (flt.search or "").strip().lower()
    out = []
    for e in entries:
        if flt.user_id is not None and e.user_id != flt.user_id:
            continue
        if not flt.matches_date(e.date):
            continue
        if needle and not _contains(needle, e.description, e.recipient, e.user_name, e.type.value):
            continue
        out.append(e)
    return out


def filter_ticket_entries(entries: Iterable[TicketEntry], flt: DashboardFilter) -> list[TicketEntry]:
    needle = (flt.search or "").strip().lower()
    out = []
    for t in entries:
        if flt.user_id is not None and t.user_id != flt.user_id:
            continue
        if not flt.matches_date(t.issue_date):
            continue
        if needle and not _contains(needle, t.passenger_name, t.pnr, t.flight_name, t.route, t.user_name):
            continue
        out.append(t)
    return out
