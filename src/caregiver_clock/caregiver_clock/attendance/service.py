from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence

from ..caregivers.repository import RosterRepository
from ..caregivers.service import clean_roster
from ..common.datetime_utils import (
    business_date,
    compute_hours,
    format_for_store,
    format_hours_for_store,
    now_utc,
    parse_instant,
    parse_stored,
    parse_stored_hours,
)
from ..common.validators import require_non_empty
from ..core.constants import LONG_SHIFT_HOURS, MAX_SHIFT_HOURS
from ..core.exceptions import (
    AlreadyActive,
    AnotherSessionActive,
    FutureEntry,
    InvalidInterval,
    MalformedTimestamp,
    NoActiveSession,
    ScheduleConflict,
    ShiftTooLong,
    ValidationError,
)
from .conflicts import ConflictDetector
from .model import AttendanceRecord, History, ShiftPreview, StoredRow, TimeEntryView
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Clock-in / clock-out state machine over an append-only record store.

    Who is active is never stored: it is derived from the full record list on
    every call. The three write operations hold ``_write_lock`` across their
    read-then-write sequence, which serializes writers inside one process
    only; separate processes sharing the store can still race.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        roster: RosterRepository,
        *,
        conflicts: ConflictDetector | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._attendance = attendance
        self._roster = roster
        self._conflicts = conflicts or ConflictDetector()
        self._clock = clock or now_utc
        self._write_lock = threading.Lock()

    # -- reads ---------------------------------------------------------------

    def list_records(self) -> List[AttendanceRecord]:
        """All parseable records in append order.

        Incomplete rows are skipped and rows with malformed timestamps are
        excluded with a warning; the read itself never fails on dirty data.
        """
        records: List[AttendanceRecord] = []
        for row in self._attendance.list_rows():
            if not row.is_complete:
                logger.debug("Skipping incomplete row %s", row.row_id)
                continue
            try:
                records.append(self._to_record(row))
            except MalformedTimestamp as exc:
                logger.warning("Excluding row %s for %r: %s", row.row_id, row.person_name, exc)
        return records

    def derive_active_person(self) -> Optional[AttendanceRecord]:
        return self._active_from(self.list_records())

    def history(self, person_name: Optional[str] = None) -> History:
        records = self.list_records()
        name = (person_name or "").strip()
        if name:
            records = [r for r in records if r.person_name == name]

        # Newest first.
        entries = [self._to_view(r) for r in sorted(records, key=lambda r: r.clock_in, reverse=True)]
        total = sum(r.total_hours for r in records if r.total_hours is not None)
        return History(entries=entries, total_hours=round(total, 2))

    def preview_clock_out(self, person_name: str, at: Any = None) -> ShiftPreview:
        """Elapsed time of the caregiver's open session, flagged when it is a long shift."""
        name = require_non_empty(person_name, "personName")
        instant = parse_instant(at, "timestamp") if at is not None else self._clock()

        record = self._find_open_record(self.list_records(), name)
        if record is None:
            raise NoActiveSession(name)

        hours = compute_hours(record.clock_in, instant)
        return ShiftPreview(
            person_name=name,
            clock_in=record.clock_in,
            hours=hours,
            is_long=hours > LONG_SHIFT_HOURS,
        )

    # -- writes --------------------------------------------------------------

    def clock_in(self, person_name: str, timestamp: Any) -> AttendanceRecord:
        name = require_non_empty(person_name, "personName")
        at = self._parse_instant(timestamp, "timestamp")

        with self._write_lock:
            self._require_registered(name)

            active = self._active_from(self.list_records())
            if active is not None and active.person_name != name:
                raise AnotherSessionActive(active.person_name)
            if active is not None:
                raise AlreadyActive(name)

            clock_in_text = format_for_store(at)
            row_id = self._attendance.append_row(
                clock_in_text=clock_in_text,
                clock_out_text="",
                person_name=name,
                total_hours_text="",
            )

        logger.info("Clock-in %s at %s (row %s)", name, clock_in_text, row_id)
        return AttendanceRecord(record_id=row_id, person_name=name, clock_in=at)

    def clock_out(self, person_name: str, timestamp: Any) -> AttendanceRecord:
        name = require_non_empty(person_name, "personName")
        at = self._parse_instant(timestamp, "timestamp")

        with self._write_lock:
            record = self._find_open_record(self.list_records(), name)
            if record is None:
                raise NoActiveSession(name)
            if at <= record.clock_in:
                raise InvalidInterval("La hora de salida debe ser posterior a la hora de entrada")

            hours = compute_hours(record.clock_in, at)
            clock_out_text = format_for_store(at)
            hours_text = format_hours_for_store(hours)
            updated = self._attendance.update_row(
                row_id=record.record_id,
                clock_out_text=clock_out_text,
                person_name=name,
                total_hours_text=hours_text,
            )
            if not updated:
                # The open row vanished between read and write.
                raise NoActiveSession(name)

        logger.info("Clock-out %s at %s (%s h, row %s)", name, clock_out_text, hours_text, record.record_id)
        return AttendanceRecord(
            record_id=record.record_id,
            person_name=name,
            clock_in=record.clock_in,
            clock_out=at,
            total_hours=round(hours, 2),
        )

    def add_historical_entry(self, person_name: str, clock_in: Any, clock_out: Any) -> AttendanceRecord:
        """Append a closed past session directly, regardless of who is active now."""
        name = require_non_empty(person_name, "personName")
        start = self._parse_instant(clock_in, "clockIn")
        end = self._parse_instant(clock_out, "clockOut")

        if start >= end:
            raise InvalidInterval("La hora de salida debe ser posterior a la hora de entrada")
        hours = compute_hours(start, end)
        if hours > MAX_SHIFT_HOURS:
            raise ShiftTooLong(f"El turno no puede ser mayor a {MAX_SHIFT_HOURS} horas")

        now = self._clock()
        if start > now:
            raise FutureEntry("No se pueden crear registros para fechas futuras")

        with self._write_lock:
            self._require_registered(name)

            conflict = self._conflicts.find_conflict(self.list_records(), name, start, end, now=now)
            if conflict is not None:
                raise ScheduleConflict(self._conflicts.describe_conflict(conflict, now=now), record=conflict)

            clock_in_text = format_for_store(start)
            clock_out_text = format_for_store(end)
            hours_text = format_hours_for_store(hours)
            row_id = self._attendance.append_row(
                clock_in_text=clock_in_text,
                clock_out_text=clock_out_text,
                person_name=name,
                total_hours_text=hours_text,
            )

        logger.info("Historical entry %s: %s -> %s (%s h, row %s)", name, clock_in_text, clock_out_text, hours_text, row_id)
        return AttendanceRecord(
            record_id=row_id,
            person_name=name,
            clock_in=start,
            clock_out=end,
            total_hours=round(hours, 2),
        )

    # -- helpers -------------------------------------------------------------

    @staticmethod
    def _parse_instant(value: Any, field_name: str) -> datetime:
        # The store keeps whole seconds; truncate so comparisons match what is written.
        return parse_instant(value, field_name).replace(microsecond=0)

    def _require_registered(self, name: str) -> None:
        if name not in clean_roster(self._roster.list_names()):
            raise ValidationError(f"{name} no está registrado como cuidador")

    @staticmethod
    def _active_from(records: Sequence[AttendanceRecord]) -> Optional[AttendanceRecord]:
        open_records = [r for r in records if r.is_open]
        if not open_records:
            return None

        latest = max(open_records, key=lambda r: r.clock_in)
        if len(open_records) > 1:
            logger.warning(
                "Data integrity: %d open sessions found (%s); treating %s as active",
                len(open_records),
                ", ".join(f"{r.person_name}#{r.record_id}" for r in open_records),
                latest.person_name,
            )
        return latest

    @staticmethod
    def _find_open_record(records: Sequence[AttendanceRecord], name: str) -> Optional[AttendanceRecord]:
        for record in reversed(records):
            if record.person_name == name and record.is_open:
                return record
        return None

    @staticmethod
    def _to_record(row: StoredRow) -> AttendanceRecord:
        clock_in = parse_stored(row.clock_in_text)
        clock_out_text = (row.clock_out_text or "").strip()
        clock_out = parse_stored(clock_out_text) if clock_out_text else None

        total_hours = None
        if clock_out is not None:
            total_hours = parse_stored_hours(row.total_hours_text)
            if total_hours is None:
                total_hours = round(compute_hours(clock_in, clock_out), 2)

        return AttendanceRecord(
            record_id=row.row_id,
            person_name=row.person_name.strip(),
            clock_in=clock_in,
            clock_out=clock_out,
            total_hours=total_hours,
        )

    @staticmethod
    def _to_view(record: AttendanceRecord) -> TimeEntryView:
        return TimeEntryView(
            id=record.record_id,
            person_name=record.person_name,
            clock_in=format_for_store(record.clock_in),
            clock_out=format_for_store(record.clock_out) if record.clock_out else None,
            total_hours=record.total_hours,
            date=business_date(record.clock_in),
        )
