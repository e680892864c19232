from __future__ import annotations

import pytest

from staff_ledger.core.enums import IncomeType
from staff_ledger.core.exceptions import ValidationError
from staff_ledger.income.schema import IncomeEntryInput, IncomeEntryPatch
from staff_ledger.tickets.schema import TicketEntryInput, TicketEntryPatch

from conftest import income_payload, ticket_payload


def test_income_input_parses_payload():
    data = IncomeEntryInput.from_payload(income_payload(type="OTP Payment", amount="120"))

    assert data.type == IncomeType.OTP_PAYMENT
    assert data.amount == 120
    assert data.to_columns()["entry_type"] == IncomeType.OTP_PAYMENT


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"amount": -5}, "negative"),
        ({"amount": "12.5"}, "whole number"),
        ({"amount": True}, "whole number"),
        ({"amount": "--5"}, "whole number"),
        ({"amount": "-+5"}, "whole number"),
        ({"type": "Salary"}, "type must be one of"),
        ({"date": "10/03/2024"}, "YYYY-MM-DD"),
        ({"date": "2024-3-1"}, "YYYY-MM-DD"),
        ({"time": "9.30"}, "HH:MM"),
        ({"time": "99:99"}, "HH:MM"),
        ({"time": "24:75"}, "HH:MM"),
        ({"time": "23:59:60"}, "HH:MM"),
        ({"description": "   "}, "description is required"),
    ],
)
def test_income_input_rejects_bad_values(overrides, message):
    with pytest.raises(ValidationError, match=message):
        IncomeEntryInput.from_payload(income_payload(**overrides))


def test_income_input_lists_missing_fields():
    with pytest.raises(ValidationError, match="date, amount"):
        IncomeEntryInput.from_payload({"time": "10:00", "type": "OTP Add", "description": "x"})


def test_income_patch_only_carries_present_fields():
    patch = IncomeEntryPatch.from_payload({"amount": 10, "recipient": None})

    assert patch.changes == {"amount": 10, "recipient": None}
    assert IncomeEntryPatch.from_payload({}).is_empty


def test_income_patch_refuses_null_required_field():
    with pytest.raises(ValidationError, match="description cannot be null"):
        IncomeEntryPatch.from_payload({"description": None})


def test_ticket_input_requires_route_fields():
    payload = ticket_payload()
    del payload["from"]

    with pytest.raises(ValidationError, match="from"):
        TicketEntryInput.from_payload(payload)


def test_ticket_input_rejects_unknown_status():
    with pytest.raises(ValidationError, match="status must be one of"):
        TicketEntryInput.from_payload(ticket_payload(status="Refunded"))


def test_ticket_patch_can_clear_optional_fields():
    patch = TicketEntryPatch.from_payload({"returnDate": None, "bdNumber": None, "to": "CGP"})

    assert patch.changes == {"return_date": None, "bd_number": None, "destination": "CGP"}
    with pytest.raises(ValidationError):
        TicketEntryPatch.from_payload({"pnr": None})


def test_income_input_accepts_long_clock_time_and_padded_text_amount():
    data = IncomeEntryInput.from_payload(income_payload(time="23:59:59", amount=" 42 "))

    assert data.time == "23:59:59"
    assert data.amount == 42
