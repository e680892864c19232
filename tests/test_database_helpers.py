from __future__ import annotations

from staff_ledger.core.enums import IncomeType
from staff_ledger.database.bootstrap import (
    SCHEMA_PATH,
    _iter_sql_statements,
    _strip_comments,
    _strip_create_db_and_use,
)
from staff_ledger.database.mysql_base import build_update, owner_scoped


def test_schema_file_splits_into_table_statements():
    sql = _strip_comments(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8")))

    statements = list(_iter_sql_statements(sql))

    assert len(statements) == 3
    assert all(s.upper().startswith("CREATE TABLE IF NOT EXISTS") for s in statements)


def test_splitter_ignores_semicolons_inside_quotes():
    statements = list(_iter_sql_statements("INSERT INTO t VALUES ('a;b'); SELECT 1"))

    assert statements == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_owner_scoped_where_clause():
    assert owner_scoped("entry_id", 5, None) == ("entry_id=%s", (5,))
    assert owner_scoped("entry_id", 5, 2) == ("entry_id=%s AND user_id=%s", (5, 2))


def test_build_update_stores_enum_values():
    sql, params = build_update(
        "income_entries",
        "entry_id",
        {"entry_type": IncomeType.OTP_ADD, "amount": 10},
        entry_id=7,
        owner_id=3,
    )

    assert sql == "UPDATE income_entries SET entry_type=%s, amount=%s WHERE entry_id=%s AND user_id=%s"
    assert params == ("OTP Add", 10, 7, 3)
