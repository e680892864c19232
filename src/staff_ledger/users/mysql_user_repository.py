from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, full_name, username, password_hash, role, is_active, last_signed_in"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
        last_signed_in=row.get("last_signed_in"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, full_name: str, username: str, password_hash: str, role: Role) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(full_name, username, password_hash, role, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (full_name, username, password_hash, role.value),
            )
            return int(cur.lastrowid)

    def update_last_signed_in(self, user_id: int, *, signed_in_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET last_signed_in=%s WHERE user_id=%s", (signed_in_at, int(user_id)))
            return cur.rowcount > 0

    def update_password_hash(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY full_name ASC, user_id ASC")
            return [_to_user(r) for r in fetchall(cur)]
