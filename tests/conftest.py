from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from staff_ledger.common.access import EntryFilter
from staff_ledger.container import assemble
from staff_ledger.core.enums import Role
from staff_ledger.core.exceptions import DatabaseUnavailableError
from staff_ledger.income.model import IncomeEntry
from staff_ledger.income.schema import IncomeEntryInput
from staff_ledger.tickets.model import TicketEntry
from staff_ledger.tickets.schema import TicketEntryInput
from staff_ledger.uploads.storage import LocalFileStorage
from staff_ledger.users.model import User
from staff_ledger.users.service import SessionUser

ADMIN_ID = 1
SARA_ID = 2
OMAR_ID = 3


class InMemoryUsers:
    def __init__(self, users=()):
        self.by_id: dict[int, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.username == username), None)

    def create_user(self, *, full_name: str, username: str, password_hash: str, role: Role) -> int:
        user_id = max(self.by_id, default=0) + 1
        self.by_id[user_id] = User(
            user_id=user_id, full_name=full_name, username=username, password_hash=password_hash, role=role
        )
        return user_id

    def update_last_signed_in(self, user_id: int, *, signed_in_at: datetime) -> bool:
        if user_id not in self.by_id:
            return False
        self.by_id[user_id] = dataclasses.replace(self.by_id[user_id], last_signed_in=signed_in_at)
        return True

    def update_password_hash(self, user_id: int, *, password_hash: str) -> bool:
        if user_id not in self.by_id:
            return False
        self.by_id[user_id] = dataclasses.replace(self.by_id[user_id], password_hash=password_hash)
        return True

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda u: u.full_name)


class _InMemoryEntries:
    """Shared owner-scoped storage behaviour; subclasses map columns to entity fields."""

    columns: dict = {}

    def __init__(self):
        self.rows: dict[int, object] = {}
        self._id = 0

    def _build(self, entry_id: int, user_id: int, user_name: str, data):
        raise NotImplementedError

    def _date(self, entry) -> str:
        raise NotImplementedError

    def _sort_key(self, entry):
        raise NotImplementedError

    def create(self, *, user_id: int, user_name: str, data) -> int:
        self._id += 1
        self.rows[self._id] = self._build(self._id, user_id, user_name, data)
        return self._id

    def get(self, entry_id: int, *, owner_id: Optional[int] = None):
        entry = self.rows.get(entry_id)
        if entry is None or (owner_id is not None and entry.user_id != owner_id):
            return None
        return entry

    def list(self, flt: EntryFilter):
        out = [
            e
            for e in self.rows.values()
            if (flt.user_id is None or e.user_id == flt.user_id)
            and (flt.start_date is None or self._date(e) >= flt.start_date)
            and (flt.end_date is None or self._date(e) <= flt.end_date)
        ]
        return sorted(out, key=self._sort_key, reverse=True)

    def update(self, entry_id: int, changes: dict, *, owner_id: Optional[int] = None) -> bool:
        entry = self.get(entry_id, owner_id=owner_id)
        if entry is None:
            return False
        fields = {self.columns.get(col, col): value for col, value in changes.items()}
        self.rows[entry_id] = dataclasses.replace(entry, **fields)
        return True

    def delete(self, entry_id: int, *, owner_id: Optional[int] = None) -> bool:
        if self.get(entry_id, owner_id=owner_id) is None:
            return False
        del self.rows[entry_id]
        return True


class InMemoryIncome(_InMemoryEntries):
    columns = {"entry_date": "date", "entry_time": "time", "entry_type": "type"}

    def _build(self, entry_id: int, user_id: int, user_name: str, data: IncomeEntryInput) -> IncomeEntry:
        return IncomeEntry(entry_id=entry_id, user_id=user_id, user_name=user_name, **dataclasses.asdict(data))

    def _date(self, entry: IncomeEntry) -> str:
        return entry.date

    def _sort_key(self, entry: IncomeEntry):
        return (entry.date, entry.time, entry.entry_id)


class InMemoryTickets(_InMemoryEntries):
    def _build(self, entry_id: int, user_id: int, user_name: str, data: TicketEntryInput) -> TicketEntry:
        return TicketEntry(entry_id=entry_id, user_id=user_id, user_name=user_name, **data.to_columns())

    def _date(self, entry: TicketEntry) -> str:
        return entry.issue_date

    def _sort_key(self, entry: TicketEntry):
        return (entry.issue_date, entry.entry_id)


class UnavailableEntries:
    """Every call fails the way MySQL repositories do when the server is down."""

    def __getattr__(self, name):
        def _fail(*args, **kwargs):
            raise DatabaseUnavailableError("Database not available")

        return _fail


def make_user(user_id: int, name: str, username: str, password: str, role: Role) -> User:
    return User(
        user_id=user_id,
        full_name=name,
        username=username,
        password_hash=generate_password_hash(password),
        role=role,
    )


@pytest.fixture
def admin() -> SessionUser:
    return SessionUser(user_id=ADMIN_ID, full_name="Admin Demo", role=Role.ADMIN)


@pytest.fixture
def sara() -> SessionUser:
    return SessionUser(user_id=SARA_ID, full_name="Sara Khan", role=Role.STAFF)


@pytest.fixture
def omar() -> SessionUser:
    return SessionUser(user_id=OMAR_ID, full_name="Omar Ali", role=Role.STAFF)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers(
        [
            make_user(ADMIN_ID, "Admin Demo", "admin", "admin123", Role.ADMIN),
            make_user(SARA_ID, "Sara Khan", "sara", "sara123", Role.STAFF),
            make_user(OMAR_ID, "Omar Ali", "omar", "omar123", Role.STAFF),
        ]
    )


@pytest.fixture
def container(users_repo, tmp_path):
    return assemble(
        users_repo=users_repo,
        income_repo=InMemoryIncome(),
        tickets_repo=InMemoryTickets(),
        storage=LocalFileStorage(tmp_path / "uploads", max_bytes=1024),
    )


@pytest.fixture
def app(container, monkeypatch):
    from staff_ledger.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username: str, password: str):
        return client.post("/api/auth/login", json={"username": username, "password": password})

    return _login


def income_payload(**overrides) -> dict:
    payload = {
        "date": "2024-03-10",
        "time": "09:30",
        "type": "Income Add",
        "amount": 500,
        "description": "Visa processing fee",
        "recipient": None,
    }
    payload.update(overrides)
    return payload


def ticket_payload(**overrides) -> dict:
    payload = {
        "issueDate": "2024-03-12",
        "passengerName": "Ahmed Hassan",
        "pnr": "X7K9QL",
        "tripType": "1 Way",
        "flightName": "QR 640",
        "from": "DOH",
        "to": "DAC",
        "departureDate": "2024-03-20",
        "arrivalDate": "2024-03-21",
        "fromIssuer": "Qatar Airways",
    }
    payload.update(overrides)
    return payload
