from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import mysql.connector

from ..core.exceptions import DatabaseUnavailableError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except (mysql.connector.errors.OperationalError, mysql.connector.errors.InterfaceError) as e:
        # connection is gone, nothing to roll back
        raise DatabaseUnavailableError("Database not available") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def build_where(clauses: List[str]) -> str:
    return " AND ".join(clauses) if clauses else "1=1"


def as_iso(value: Any) -> Optional[str]:
    """Normalize DATE/VARCHAR date columns to 'YYYY-MM-DD' strings."""

    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def sql_value(value: Any) -> Any:
    """Enums are stored by value."""

    return value.value if isinstance(value, Enum) else value


def owner_scoped(id_column: str, entry_id: int, owner_id: Optional[int]) -> Tuple[str, Tuple[Any, ...]]:
    """WHERE clause matching one row by id, and by owner when owner_id is given."""

    clauses = [f"{id_column}=%s"]
    params: List[Any] = [int(entry_id)]
    if owner_id is not None:
        clauses.append("user_id=%s")
        params.append(int(owner_id))
    return build_where(clauses), tuple(params)


def build_update(table: str, id_column: str, changes: Dict[str, Any], *, entry_id: int, owner_id: Optional[int]):
    """UPDATE statement for a whitelisted column dict, optionally scoped to an owner."""

    assignments = ", ".join(f"{col}=%s" for col in changes)
    where, scope_params = owner_scoped(id_column, entry_id, owner_id)
    params = tuple(sql_value(v) for v in changes.values()) + scope_params
    return f"UPDATE {table} SET {assignments} WHERE {where}", params
