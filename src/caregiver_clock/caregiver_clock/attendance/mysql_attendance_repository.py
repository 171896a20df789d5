from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import StoredRow
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_rows(self) -> Sequence[StoredRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT row_id, clock_in, clock_out, person_name, total_hours
                FROM attendance_log
                ORDER BY row_id ASC
                """
            )
            rows = fetchall(cur)
            return [
                StoredRow(
                    row_id=int(r["row_id"]),
                    clock_in_text=r.get("clock_in") or "",
                    clock_out_text=r.get("clock_out") or "",
                    person_name=r.get("person_name") or "",
                    total_hours_text=r.get("total_hours") or "",
                )
                for r in rows
            ]

    def append_row(
        self,
        *,
        clock_in_text: str,
        clock_out_text: str,
        person_name: str,
        total_hours_text: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_log(clock_in, clock_out, person_name, total_hours)
                VALUES(%s,%s,%s,%s)
                """,
                (clock_in_text, clock_out_text or "", person_name, total_hours_text or ""),
            )
            return int(cur.lastrowid)

    def update_row(
        self,
        *,
        row_id: int,
        clock_out_text: str,
        person_name: str,
        total_hours_text: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_log
                SET clock_out=%s, person_name=%s, total_hours=%s
                WHERE row_id=%s
                """,
                (clock_out_text, person_name, total_hours_text, int(row_id)),
            )
            return cur.rowcount > 0
