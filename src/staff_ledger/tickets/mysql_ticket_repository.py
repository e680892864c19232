from __future__ import annotations

from typing import Optional, Sequence

from ..common.access import EntryFilter
from ..core.enums import TicketStatus, TripType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_iso, build_update, build_where, db_cursor, fetchall, fetchone, owner_scoped, sql_value
from .model import TicketEntry
from .repository import TicketRepository
from .schema import TicketEntryInput

_COLUMNS = (
    "entry_id, user_id, user_name, issue_date, passenger_name, pnr, trip_type, flight_name, "
    "origin, destination, departure_date, arrival_date, return_date, from_issuer, bd_number, "
    "qr_number, ticket_copy_url, ticket_copy_file_name, status, created_at, updated_at"
)


def _to_entry(r: dict) -> TicketEntry:
    return TicketEntry(
        entry_id=int(r["entry_id"]),
        user_id=int(r["user_id"]),
        user_name=r["user_name"],
        issue_date=as_iso(r["issue_date"]),
        passenger_name=r["passenger_name"],
        pnr=r["pnr"],
        trip_type=TripType(r["trip_type"]),
        flight_name=r["flight_name"],
        origin=r["origin"],
        destination=r["destination"],
        departure_date=as_iso(r["departure_date"]),
        arrival_date=as_iso(r["arrival_date"]),
        return_date=as_iso(r.get("return_date")),
        from_issuer=r["from_issuer"],
        bd_number=r.get("bd_number"),
        qr_number=r.get("qr_number"),
        ticket_copy_url=r.get("ticket_copy_url"),
        ticket_copy_file_name=r.get("ticket_copy_file_name"),
        status=TicketStatus(r["status"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLTicketRepository(TicketRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, user_name: str, data: TicketEntryInput) -> int:
        columns = data.to_columns()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO ticket_entries(user_id, user_name, {", ".join(columns)})
                VALUES(%s,%s,{",".join(["%s"] * len(columns))})
                """,
                (int(user_id), user_name, *[sql_value(v) for v in columns.values()]),
            )
            return int(cur.lastrowid)

    def get(self, entry_id: int, *, owner_id: Optional[int] = None) -> Optional[TicketEntry]:
        where, params = owner_scoped("entry_id", entry_id, owner_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM ticket_entries WHERE {where}", params)
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def list(self, flt: EntryFilter) -> Sequence[TicketEntry]:
        clauses: list[str] = []
        params: list[object] = []

        if flt.user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(flt.user_id))
        if flt.start_date:
            clauses.append("issue_date >= %s")
            params.append(flt.start_date)
        if flt.end_date:
            clauses.append("issue_date <= %s")
            params.append(flt.end_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM ticket_entries
                WHERE {build_where(clauses)}
                ORDER BY issue_date DESC, entry_id DESC
                """,
                tuple(params),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def update(self, entry_id: int, changes: dict, *, owner_id: Optional[int] = None) -> bool:
        sql, params = build_update("ticket_entries", "entry_id", changes, entry_id=entry_id, owner_id=owner_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return cur.rowcount > 0

    def delete(self, entry_id: int, *, owner_id: Optional[int] = None) -> bool:
        where, params = owner_scoped("entry_id", entry_id, owner_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM ticket_entries WHERE {where}", params)
            return cur.rowcount > 0
