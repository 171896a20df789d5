from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from typing import Optional

import pytest

from src.caregiver_clock.caregiver_clock.attendance.model import StoredRow
from src.caregiver_clock.caregiver_clock.attendance.service import AttendanceService
from src.caregiver_clock.caregiver_clock.core.exceptions import StoreUnavailable

# 07:00:00 business time (UTC-5) on 01/06/2024
FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class InMemoryAttendance:
    def __init__(self):
        self._rows: list[StoredRow] = []
        self._id = 0
        self.writes = 0

    def add_raw(self, clock_in_text: str, clock_out_text: str, person_name: str, total_hours_text: str = "") -> int:
        self._id += 1
        self._rows.append(
            StoredRow(
                row_id=self._id,
                clock_in_text=clock_in_text,
                clock_out_text=clock_out_text,
                person_name=person_name,
                total_hours_text=total_hours_text,
            )
        )
        return self._id

    def get(self, row_id: int) -> Optional[StoredRow]:
        for row in self._rows:
            if row.row_id == row_id:
                return row
        return None

    @property
    def open_rows(self) -> list[StoredRow]:
        return [r for r in self._rows if not r.clock_out_text]

    def list_rows(self):
        return list(self._rows)

    def append_row(self, *, clock_in_text, clock_out_text, person_name, total_hours_text) -> int:
        self.writes += 1
        return self.add_raw(clock_in_text, clock_out_text, person_name, total_hours_text)

    def update_row(self, *, row_id, clock_out_text, person_name, total_hours_text) -> bool:
        self.writes += 1
        for i, row in enumerate(self._rows):
            if row.row_id == row_id:
                self._rows[i] = dataclasses.replace(
                    row,
                    clock_out_text=clock_out_text,
                    person_name=person_name,
                    total_hours_text=total_hours_text,
                )
                return True
        return False


class InMemoryRoster:
    def __init__(self, names):
        self.names = list(names)

    def list_names(self):
        return list(self.names)


class UnavailableStore:
    """Stands in for both repositories when the store cannot be reached."""

    def _fail(self, *args, **kwargs):
        raise StoreUnavailable("No se pudo conectar con el almacén de registros")

    list_rows = _fail
    append_row = _fail
    update_row = _fail
    list_names = _fail


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def roster_repo() -> InMemoryRoster:
    return InMemoryRoster(["Nombre", "Ana", "Luis", "  "])


@pytest.fixture
def unavailable_store() -> UnavailableStore:
    return UnavailableStore()


@pytest.fixture
def service(attendance_repo, roster_repo, fixed_now) -> AttendanceService:
    return AttendanceService(attendance_repo, roster_repo, clock=lambda: fixed_now)
