"""Request schema for ticket entries, shared by the HTTP layer and the service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.validators import optional_iso_date, optional_text, require_choice, require_iso_date, require_non_empty
from ..core.enums import TicketStatus, TripType
from ..core.exceptions import ValidationError


def _text(name: str):
    return lambda v: require_non_empty(v, name)


def _date(name: str):
    return lambda v: require_iso_date(v, name)


# API field -> (attribute/column, parser)
_FIELDS = {
    "issueDate": ("issue_date", _date("issueDate")),
    "passengerName": ("passenger_name", _text("passengerName")),
    "pnr": ("pnr", _text("pnr")),
    "tripType": ("trip_type", lambda v: require_choice(v, TripType, "tripType")),
    "flightName": ("flight_name", _text("flightName")),
    "from": ("origin", _text("from")),
    "to": ("destination", _text("to")),
    "departureDate": ("departure_date", _date("departureDate")),
    "arrivalDate": ("arrival_date", _date("arrivalDate")),
    "returnDate": ("return_date", lambda v: optional_iso_date(v, "returnDate")),
    "fromIssuer": ("from_issuer", _text("fromIssuer")),
    "bdNumber": ("bd_number", optional_text),
    "qrNumber": ("qr_number", optional_text),
    "ticketCopyUrl": ("ticket_copy_url", optional_text),
    "ticketCopyFileName": ("ticket_copy_file_name", optional_text),
    "status": ("status", lambda v: require_choice(v, TicketStatus, "status")),
}

_REQUIRED = (
    "issueDate",
    "passengerName",
    "pnr",
    "tripType",
    "flightName",
    "from",
    "to",
    "departureDate",
    "arrivalDate",
    "fromIssuer",
)
_NULLABLE = {"returnDate", "bdNumber", "qrNumber", "ticketCopyUrl", "ticketCopyFileName"}


@dataclass(frozen=True)
class TicketEntryInput:
    issue_date: str
    passenger_name: str
    pnr: str
    trip_type: TripType
    flight_name: str
    origin: str
    destination: str
    departure_date: str
    arrival_date: str
    from_issuer: str
    return_date: Optional[str] = None
    bd_number: Optional[str] = None
    qr_number: Optional[str] = None
    ticket_copy_url: Optional[str] = None
    ticket_copy_file_name: Optional[str] = None
    status: TicketStatus = TicketStatus.PENDING

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TicketEntryInput":
        missing = [k for k in _REQUIRED if payload.get(k) is None]
        if missing:
            raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

        values = {}
        for name, (attr, parse) in _FIELDS.items():
            raw = payload.get(name)
            if raw is None:
                continue  # optional field, dataclass default applies
            values[attr] = parse(raw)
        return cls(**values)

    def to_columns(self) -> dict:
        return {attr: getattr(self, attr) for attr, _ in _FIELDS.values()}


@dataclass(frozen=True)
class TicketEntryPatch:
    """Partial update: only the fields present in the payload are changed."""

    changes: dict

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TicketEntryPatch":
        changes: dict = {}
        for name, (column, parse) in _FIELDS.items():
            if name not in payload:
                continue
            value = payload[name]
            if value is None:
                if name not in _NULLABLE:
                    raise ValidationError(f"{name} cannot be null")
                changes[column] = None
                continue
            changes[column] = parse(value)
        return cls(changes=changes)

    @property
    def is_empty(self) -> bool:
        return not self.changes
