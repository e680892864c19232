from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .income.mysql_income_repository import MySQLIncomeRepository
from .income.repository import IncomeRepository
from .income.service import IncomeService
from .reports.service import ReportService
from .tickets.mysql_ticket_repository import MySQLTicketRepository
from .tickets.repository import TicketRepository
from .tickets.service import TicketService
from .uploads.storage import FileStorage
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    income_repo: IncomeRepository
    tickets_repo: TicketRepository
    storage: FileStorage

    auth_service: AuthService
    user_service: UserService
    income_service: IncomeService
    ticket_service: TicketService
    report_service: ReportService


def assemble(
    *,
    users_repo: UserRepository,
    income_repo: IncomeRepository,
    tickets_repo: TicketRepository,
    storage: FileStorage,
    conn: Optional[DatabaseConnection] = None,
    company_name: str = "AMIN TOUCH",
    company_tagline: str = "TRADING CONTRACTING & HOSPITALITY SERVICES",
) -> Container:
    """Wire services on top of the given repositories (MySQL in production, in-memory in tests)."""

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    income_service = IncomeService(income_repo)
    ticket_service = TicketService(tickets_repo)
    report_service = ReportService(
        income_service,
        ticket_service,
        users_repo,
        user_service,
        company_name=company_name,
        company_tagline=company_tagline,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        income_repo=income_repo,
        tickets_repo=tickets_repo,
        storage=storage,
        auth_service=auth_service,
        user_service=user_service,
        income_service=income_service,
        ticket_service=ticket_service,
        report_service=report_service,
    )


def build_container(*, db_config: dict, storage: FileStorage, **branding) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return assemble(
        users_repo=MySQLUserRepository(conn),
        income_repo=MySQLIncomeRepository(conn),
        tickets_repo=MySQLTicketRepository(conn),
        storage=storage,
        conn=conn,
        **branding,
    )
