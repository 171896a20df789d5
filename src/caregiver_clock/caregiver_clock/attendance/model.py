from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence


@dataclass(frozen=True)
class StoredRow:
    """Raw 4-field row as held by the record store, plus its durable key."""

    row_id: int
    clock_in_text: str
    clock_out_text: str
    person_name: str
    total_hours_text: str = ""

    @property
    def is_complete(self) -> bool:
        return bool((self.clock_in_text or "").strip()) and bool((self.person_name or "").strip())


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one caregiver session.

    ``clock_out`` is None while the session is open.
    """

    record_id: int
    person_name: str
    clock_in: datetime
    clock_out: Optional[datetime] = None
    total_hours: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    def effective_end(self, now: datetime) -> datetime:
        return self.clock_out if self.clock_out is not None else now


@dataclass(frozen=True)
class TimeEntryView:
    """Read model for the history listing (store-formatted timestamps)."""

    id: int
    person_name: str
    clock_in: str
    clock_out: Optional[str]
    total_hours: Optional[float]
    date: str


@dataclass(frozen=True)
class History:
    entries: Sequence[TimeEntryView]
    total_hours: float

    @property
    def count(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class ShiftPreview:
    person_name: str
    clock_in: datetime
    hours: float
    is_long: bool
