from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TicketStatus, TripType


@dataclass(frozen=True)
class TicketEntry:
    """Domain entity: a flight ticket sold by a staff member."""

    entry_id: int
    user_id: int
    user_name: str
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
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def route(self) -> str:
        return f"{self.origin}-{self.destination}"

    def to_api(self) -> dict:
        return {
            "id": self.entry_id,
            "userId": self.user_id,
            "userName": self.user_name,
            "issueDate": self.issue_date,
            "passengerName": self.passenger_name,
            "pnr": self.pnr,
            "tripType": self.trip_type.value,
            "flightName": self.flight_name,
            "from": self.origin,
            "to": self.destination,
            "departureDate": self.departure_date,
            "arrivalDate": self.arrival_date,
            "returnDate": self.return_date,
            "fromIssuer": self.from_issuer,
            "bdNumber": self.bd_number,
            "qrNumber": self.qr_number,
            "ticketCopyUrl": self.ticket_copy_url,
            "ticketCopyFileName": self.ticket_copy_file_name,
            "status": self.status.value,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
