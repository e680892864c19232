from __future__ import annotations

from typing import Optional, Sequence

from ..common.access import EntryFilter
from ..core.enums import IncomeType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_iso, build_update, build_where, db_cursor, fetchall, fetchone, owner_scoped, sql_value
from .model import IncomeEntry
from .repository import IncomeRepository
from .schema import IncomeEntryInput

_COLUMNS = (
    "entry_id, user_id, user_name, entry_date, entry_time, entry_type, amount, "
    "description, recipient, created_at, updated_at"
)


def _to_entry(r: dict) -> IncomeEntry:
    return IncomeEntry(
        entry_id=int(r["entry_id"]),
        user_id=int(r["user_id"]),
        user_name=r["user_name"],
        date=as_iso(r["entry_date"]),
        time=str(r["entry_time"])[:5],
        type=IncomeType(r["entry_type"]),
        amount=int(r["amount"]),
        description=r["description"],
        recipient=r.get("recipient"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLIncomeRepository(IncomeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, user_name: str, data: IncomeEntryInput) -> int:
        columns = data.to_columns()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO income_entries(user_id, user_name, {", ".join(columns)})
                VALUES(%s,%s,{",".join(["%s"] * len(columns))})
                """,
                (int(user_id), user_name, *[sql_value(v) for v in columns.values()]),
            )
            return int(cur.lastrowid)

    def get(self, entry_id: int, *, owner_id: Optional[int] = None) -> Optional[IncomeEntry]:
        where, params = owner_scoped("entry_id", entry_id, owner_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM income_entries WHERE {where}", params)
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def list(self, flt: EntryFilter) -> Sequence[IncomeEntry]:
        clauses: list[str] = []
        params: list[object] = []

        if flt.user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(flt.user_id))
        if flt.start_date:
            clauses.append("entry_date >= %s")
            params.append(flt.start_date)
        if flt.end_date:
            clauses.append("entry_date <= %s")
            params.append(flt.end_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM income_entries
                WHERE {build_where(clauses)}
                ORDER BY entry_date DESC, entry_time DESC, entry_id DESC
                """,
                tuple(params),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def update(self, entry_id: int, changes: dict, *, owner_id: Optional[int] = None) -> bool:
        sql, params = build_update("income_entries", "entry_id", changes, entry_id=entry_id, owner_id=owner_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return cur.rowcount > 0

    def delete(self, entry_id: int, *, owner_id: Optional[int] = None) -> bool:
        where, params = owner_scoped("entry_id", entry_id, owner_id)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM income_entries WHERE {where}", params)
            return cur.rowcount > 0
