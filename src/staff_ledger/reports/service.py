from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..income.service import IncomeService
from ..tickets.service import TicketService
from ..users.repository import UserRepository
from ..users.service import SessionUser, UserService
from .aggregation import DashboardFilter, filter_income_entries, filter_ticket_entries, summarize
from .pdf_report import ReportData, build_report_pdf
from .spreadsheet import build_entries_workbook

ALL_STAFF = "All Staff"


@dataclass(frozen=True)
class ExportFile:
    file_name: str
    content: bytes


def describe_period(start_date: Optional[str], end_date: Optional[str]) -> str:
    if start_date and end_date:
        return f"{start_date} to {end_date}"
    if start_date:
        return f"From {start_date}"
    if end_date:
        return f"Until {end_date}"
    return "All time"


class ReportService:
    def __init__(
        self,
        income: IncomeService,
        tickets: TicketService,
        users: UserRepository,
        user_service: UserService,
        *,
        company_name: str = "AMIN TOUCH",
        company_tagline: str = "TRADING CONTRACTING & HOSPITALITY SERVICES",
    ):
        self._income = income
        self._tickets = tickets
        self._users = users
        self._user_service = user_service
        self._company_name = company_name
        self._company_tagline = company_tagline

    def dashboard_summary(
        self,
        actor: SessionUser,
        *,
        user_id: Optional[int] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
        search: Optional[str] = None,
    ) -> dict:
        if month is not None and not 1 <= month <= 12:
            raise ValidationError("month must be between 1 and 12")

        flt = DashboardFilter(user_id=user_id if actor.is_admin else None, year=year, month=month, search=search)
        income = filter_income_entries(self._income.list(actor, user_id=flt.user_id), flt)
        tickets = filter_ticket_entries(self._tickets.list(actor, user_id=flt.user_id), flt)

        out = summarize(income, tickets).to_api()
        if actor.is_admin:
            out["totalStaff"] = self._user_service.count_staff(actor)
        return out

    def _staff_name(self, actor: SessionUser, user_id: Optional[int]) -> str:
        if not actor.is_admin:
            return actor.full_name
        if user_id is None:
            return ALL_STAFF
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user.full_name

    def staff_report_pdf(
        self,
        actor: SessionUser,
        *,
        user_id: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ExportFile:
        staff_name = self._staff_name(actor, user_id)
        income = self._income.list(actor, user_id=user_id, start_date=start_date, end_date=end_date)
        tickets = self._tickets.list(actor, user_id=user_id, start_date=start_date, end_date=end_date)
        summary = summarize(income, tickets)

        file_name, content = build_report_pdf(
            ReportData(
                staff_name=staff_name,
                period=describe_period(start_date, end_date),
                income_entries=income,
                ticket_entries=tickets,
                total_income=summary.total_income,
                total_otp=summary.total_otp,
                total_tickets=summary.total_tickets,
                generated_on=today or date.today(),
                company_name=self._company_name,
                company_tagline=self._company_tagline,
            )
        )
        return ExportFile(file_name=file_name, content=content)

    def entries_workbook(
        self,
        actor: SessionUser,
        *,
        user_id: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        today: Optional[date] = None,
    ) -> ExportFile:
        if not actor.is_admin:
            raise AuthorizationError("Admin access required")

        staff_name = self._staff_name(actor, user_id)
        income = self._income.list(actor, user_id=user_id, start_date=start_date, end_date=end_date)
        tickets = self._tickets.list(actor, user_id=user_id, start_date=start_date, end_date=end_date)
        on = (today or date.today()).isoformat()
        file_name = f"{'_'.join(staff_name.split())}_Entries_{on}.xlsx"
        return ExportFile(file_name=file_name, content=build_entries_workbook(income, tickets))
