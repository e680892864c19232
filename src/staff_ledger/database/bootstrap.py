from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

DEMO_ACCOUNTS = (
    # (full_name, username, password, role)
    ("Admin Demo", "admin", "admin123", "admin"),
    ("Staff Demo", "staff", "staff123", "staff"),
)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    target = DBConfig.from_dict(db_config)

    sql = _strip_comments(_strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8")))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied to %s@%s/%s", target.user, target.host, target.database)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset) the demo admin and staff accounts with hashed passwords."""

    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        for full_name, username, password, role in DEMO_ACCOUNTS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET full_name=%s, password_hash=%s, role=%s, is_active=1
                    WHERE username=%s
                    """,
                    (full_name, password_hash, role, username),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (full_name, username, password_hash, role)
                    VALUES (%s, %s, %s, %s)
                    """,
                    (full_name, username, password_hash, role),
                )
        conn.commit()
    finally:
        conn.close()
    logger.info("Demo accounts ready: %s", ", ".join(a[1] for a in DEMO_ACCOUNTS))


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
