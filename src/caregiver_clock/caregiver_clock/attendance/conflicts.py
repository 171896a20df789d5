from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import format_for_store
from .model import AttendanceRecord

IN_PROGRESS_MARKER = "(en curso)"


class ConflictDetector:
    """Finds sessions of one caregiver that overlap a candidate interval.

    Intervals are half-open: a session ending exactly when the candidate
    starts does not conflict. Open sessions end at ``now``.
    """

    def find_conflict(
        self,
        records: Iterable[AttendanceRecord],
        person_name: str,
        start: datetime,
        end: datetime,
        *,
        now: datetime,
    ) -> Optional[AttendanceRecord]:
        for record in records:
            if record.person_name != person_name:
                continue
            if start < record.effective_end(now) and end > record.clock_in:
                return record
        return None

    def describe_conflict(self, record: AttendanceRecord, *, now: datetime) -> str:
        start = format_for_store(record.clock_in)
        if record.is_open:
            return f"{record.person_name} ya tiene un registro desde {start} {IN_PROGRESS_MARKER}."
        end = format_for_store(record.effective_end(now))
        return f"{record.person_name} ya tiene un registro desde {start} hasta {end}."
