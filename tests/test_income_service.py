from __future__ import annotations

import pytest

from staff_ledger.core.enums import IncomeType
from staff_ledger.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from staff_ledger.income.schema import IncomeEntryInput, IncomeEntryPatch
from staff_ledger.income.service import IncomeService

from conftest import UnavailableEntries, InMemoryIncome, income_payload


@pytest.fixture
def service() -> IncomeService:
    return IncomeService(InMemoryIncome())


def _add(service, actor, **overrides):
    return service.create(actor, IncomeEntryInput.from_payload(income_payload(**overrides)))


def test_create_stamps_owner_and_name(service, sara):
    entry = _add(service, sara, recipient="  Head office ")

    assert entry.user_id == sara.user_id
    assert entry.user_name == "Sara Khan"
    assert entry.type == IncomeType.INCOME_ADD
    assert entry.recipient == "Head office"


def test_list_is_newest_first(service, sara):
    _add(service, sara, date="2024-03-01", time="10:00")
    _add(service, sara, date="2024-03-05", time="08:00")
    _add(service, sara, date="2024-03-05", time="18:00")

    rows = service.list_mine(sara)

    assert [(e.date, e.time) for e in rows] == [
        ("2024-03-05", "18:00"),
        ("2024-03-05", "08:00"),
        ("2024-03-01", "10:00"),
    ]


def test_staff_never_sees_other_staff_rows(service, sara, omar):
    _add(service, sara)
    _add(service, omar)

    # a userId asked for by a non-admin is ignored
    rows = service.list(sara, user_id=omar.user_id)

    assert {e.user_id for e in rows} == {sara.user_id}


def test_admin_lists_everyone_or_one_user(service, admin, sara, omar):
    _add(service, sara)
    _add(service, omar)

    assert {e.user_id for e in service.list_all(admin)} == {sara.user_id, omar.user_id}
    assert {e.user_id for e in service.list(admin, user_id=omar.user_id)} == {omar.user_id}


def test_list_all_requires_admin(service, sara):
    with pytest.raises(AuthorizationError):
        service.list_all(sara)


def test_date_range_is_inclusive(service, sara):
    for d in ("2024-02-28", "2024-03-01", "2024-03-15", "2024-03-31", "2024-04-01"):
        _add(service, sara, date=d)

    rows = service.list_mine(sara, start_date="2024-03-01", end_date="2024-03-31")

    assert sorted(e.date for e in rows) == ["2024-03-01", "2024-03-15", "2024-03-31"]


def test_inverted_date_range_is_rejected(service, sara):
    with pytest.raises(ValidationError):
        service.list_mine(sara, start_date="2024-04-01", end_date="2024-03-01")


def test_owner_updates_own_entry(service, sara):
    entry = _add(service, sara)

    updated = service.update(sara, entry.entry_id, IncomeEntryPatch.from_payload({"amount": 750, "recipient": None}))

    assert updated.amount == 750
    assert updated.recipient is None
    assert updated.description == entry.description


def test_staff_cannot_touch_foreign_entry(service, sara, omar):
    entry = _add(service, sara)
    patch = IncomeEntryPatch.from_payload({"amount": 1})

    with pytest.raises(AuthorizationError, match="Not authorized"):
        service.update(omar, entry.entry_id, patch)
    with pytest.raises(AuthorizationError):
        service.delete(omar, entry.entry_id)
    with pytest.raises(AuthorizationError):
        service.get(omar, entry.entry_id)

    assert service.get(sara, entry.entry_id).amount == 500


def test_staff_targeting_missing_entry_is_forbidden(service, sara):
    with pytest.raises(AuthorizationError):
        service.delete(sara, 999)


def test_admin_edits_any_entry_but_missing_is_not_found(service, admin, sara):
    entry = _add(service, sara)

    updated = service.update(admin, entry.entry_id, IncomeEntryPatch.from_payload({"type": "Income Minus"}))
    assert updated.type == IncomeType.INCOME_MINUS
    assert updated.user_id == sara.user_id

    with pytest.raises(NotFoundError):
        service.update(admin, 999, IncomeEntryPatch.from_payload({"amount": 1}))


def test_admin_deletes_any_entry(service, admin, sara):
    entry = _add(service, sara)

    service.delete(admin, entry.entry_id)

    assert service.list_mine(sara) == []
    with pytest.raises(NotFoundError):
        service.delete(admin, entry.entry_id)


def test_empty_patch_returns_entry_unchanged(service, sara):
    entry = _add(service, sara)

    assert service.update(sara, entry.entry_id, IncomeEntryPatch.from_payload({})) == entry


def test_deleted_entry_disappears_from_owner_list(service, sara):
    keep = _add(service, sara)
    gone = _add(service, sara, description="Refund")

    service.delete(sara, gone.entry_id)

    assert [e.entry_id for e in service.list_mine(sara)] == [keep.entry_id]


def test_reads_degrade_to_empty_when_database_is_down(sara, admin):
    service = IncomeService(UnavailableEntries())

    assert service.list_mine(sara) == []
    assert service.list_all(admin) == []
