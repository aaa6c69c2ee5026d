from datetime import time, timedelta
from pathlib import Path

import pytest

from src.hr_calendar.hr_calendar.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.hr_calendar.hr_calendar.database.mysql_base import normalize_mysql_duration, normalize_mysql_time

SCHEMA = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def test_normalize_mysql_duration():
    assert normalize_mysql_duration(None) is None
    assert normalize_mysql_duration(timedelta(hours=30)) == timedelta(hours=30)
    assert normalize_mysql_duration(time(8, 15)) == timedelta(hours=8, minutes=15)
    assert normalize_mysql_duration("07:45:30") == timedelta(hours=7, minutes=45, seconds=30)
    with pytest.raises(ValueError):
        normalize_mysql_duration("745")
    with pytest.raises(TypeError):
        normalize_mysql_duration(12.5)


def test_normalize_mysql_time_wraps_days():
    assert normalize_mysql_time(timedelta(hours=9)) == time(9, 0)
    assert normalize_mysql_time(timedelta(hours=25, minutes=30)) == time(1, 30)
    assert normalize_mysql_time(None) is None


def test_split_statements_ignores_quoted_semicolons():
    sql = "INSERT INTO holidays (title) VALUES ('a;b'); SELECT 1;\n"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO holidays (title) VALUES ('a;b')", "SELECT 1"]


def test_schema_creates_every_table():
    sql = _strip_create_db_and_use(SCHEMA.read_text(encoding="utf-8"))

    statements = list(iter_sql_statements(sql))

    assert len(statements) == 6
    for table in ("shifts", "users", "attendance_records", "attendance_sessions", "leave_requests", "holidays"):
        assert any(f"CREATE TABLE IF NOT EXISTS {table}" in s for s in statements)
