from __future__ import annotations

from pathlib import Path

import mysql.connector
import pytest

from src.caregiver_clock.caregiver_clock.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.caregiver_clock.caregiver_clock.caregivers.mysql_roster_repository import MySQLRosterRepository
from src.caregiver_clock.caregiver_clock.core.exceptions import StoreUnavailable
from src.caregiver_clock.caregiver_clock.database.bootstrap import iter_sql_statements
from src.caregiver_clock.caregiver_clock.database.connection import DatabaseConnection, DBConfig


class FakeCursor:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.executed = []
        self.lastrowid = 0
        self.rowcount = 0
        self.closed = False

    def execute(self, sql, params=None):
        if self.error is not None:
            raise self.error
        self.executed.append((" ".join(sql.split()), params))
        self.lastrowid = 42
        self.rowcount = 1

    def fetchall(self):
        return self.rows

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    def __init__(self, cursor):
        self.cursor = cursor
        self.conn = FakeConnection(cursor)

    def connect(self):
        return self.conn


def test_list_rows_maps_columns_and_null_text():
    cursor = FakeCursor(
        rows=[
            {"row_id": 7, "clock_in": "01/01/2024, 09:00:00", "clock_out": None, "person_name": "Ana", "total_hours": None},
        ]
    )
    rows = MySQLAttendanceRepository(FakeConnFactory(cursor)).list_rows()

    assert len(rows) == 1
    assert rows[0].row_id == 7
    assert rows[0].clock_out_text == ""
    assert rows[0].total_hours_text == ""


def test_append_and_update_commit_and_return_keys():
    factory = FakeConnFactory(FakeCursor())
    repo = MySQLAttendanceRepository(factory)

    row_id = repo.append_row(clock_in_text="01/01/2024, 09:00:00", clock_out_text="", person_name="Ana", total_hours_text="")
    updated = repo.update_row(row_id=row_id, clock_out_text="01/01/2024, 10:00:00", person_name="Ana", total_hours_text="1.00")

    assert row_id == 42
    assert updated is True
    assert factory.conn.committed
    sql, params = factory.cursor.executed[-1]
    assert sql.startswith("UPDATE attendance_log SET clock_out=%s")
    assert params == ("01/01/2024, 10:00:00", "Ana", "1.00", 42)


def test_driver_error_becomes_store_unavailable_and_rolls_back():
    factory = FakeConnFactory(FakeCursor(error=mysql.connector.errors.OperationalError("Lost connection")))

    with pytest.raises(StoreUnavailable):
        MySQLAttendanceRepository(factory).list_rows()
    assert factory.conn.rolled_back
    assert factory.conn.closed


def test_roster_repository_reads_names():
    cursor = FakeCursor(rows=[{"name": "Ana"}, {"name": "Luis"}])

    assert MySQLRosterRepository(FakeConnFactory(cursor)).list_names() == ["Ana", "Luis"]


def test_connect_failure_and_timeout_are_store_unavailable(monkeypatch):
    seen = {}

    def fake_connect(**kwargs):
        seen.update(kwargs)
        raise mysql.connector.errors.InterfaceError("Can't connect to MySQL server (timed out)")

    monkeypatch.setattr(mysql.connector, "connect", fake_connect)
    conn = DatabaseConnection(DBConfig(host="db", port=3306, user="u", password="p", database="d", timeout_seconds=3))

    with pytest.raises(StoreUnavailable):
        conn.connect()
    assert seen["connection_timeout"] == 3


def test_iter_sql_statements_ignores_semicolons_in_quotes():
    sql = "INSERT INTO caregivers(name) VALUES ('A;B');\nINSERT INTO caregivers(name) VALUES (\"C\");"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO caregivers(name) VALUES ('A;B')",
        'INSERT INTO caregivers(name) VALUES ("C")',
    ]


def test_get_instance_is_shared_per_config(monkeypatch):
    monkeypatch.setattr(DatabaseConnection, "_instances", {})
    base = dict(host="db", port=3306, user="u", password="p", database="d")

    first = DatabaseConnection.get_instance(DBConfig(**base, timeout_seconds=3))
    again = DatabaseConnection.get_instance(DBConfig(**base, timeout_seconds=3))
    other = DatabaseConnection.get_instance(DBConfig(**base, timeout_seconds=30))

    assert first is again
    assert other is not first
    assert other._config.timeout_seconds == 30


def test_caregiver_names_are_case_sensitive_in_schema():
    schema = (Path(__file__).resolve().parents[2] / "database" / "schema.sql").read_text(encoding="utf-8")
    name_column = next(line for line in schema.splitlines() if line.strip().startswith("name VARCHAR"))

    assert "COLLATE utf8mb4_bin" in name_column
