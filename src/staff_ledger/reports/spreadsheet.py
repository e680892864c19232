from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from ..income.model import IncomeEntry
from ..tickets.model import TicketEntry

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

INCOME_HEADERS = ["Date", "Time", "Staff", "Type", "Amount", "Description", "Recipient"]
TICKET_HEADERS = [
    "Issue Date",
    "Staff",
    "Passenger",
    "PNR",
    "Trip Type",
    "Flight",
    "From",
    "To",
    "Departure",
    "Arrival",
    "Return",
    "Issuer",
    "BD Number",
    "QR Number",
    "Status",
]


def build_entries_workbook(income: Sequence[IncomeEntry], tickets: Sequence[TicketEntry]) -> bytes:
    """Two-sheet .xlsx export (Income, Tickets) of the given entry lists."""

    income_df = pd.DataFrame(
        [
            (e.date, e.time, e.user_name, e.type.value, e.amount, e.description, e.recipient or "")
            for e in income
        ],
        columns=INCOME_HEADERS,
    )
    ticket_df = pd.DataFrame(
        [
            (
                t.issue_date,
                t.user_name,
                t.passenger_name,
                t.pnr,
                t.trip_type.value,
                t.flight_name,
                t.origin,
                t.destination,
                t.departure_date,
                t.arrival_date,
                t.return_date or "",
                t.from_issuer,
                t.bd_number or "",
                t.qr_number or "",
                t.status.value,
            )
            for t in tickets
        ],
        columns=TICKET_HEADERS,
    )

    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        income_df.to_excel(writer, sheet_name="Income", index=False)
        ticket_df.to_excel(writer, sheet_name="Tickets", index=False)
    return out.getvalue()
