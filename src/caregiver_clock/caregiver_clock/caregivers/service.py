from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, List

from ..common.datetime_utils import format_for_store
from ..core.constants import ROSTER_HEADER_TOKENS
from .model import Caregiver
from .repository import RosterRepository

if TYPE_CHECKING:
    from ..attendance.service import AttendanceService

logger = logging.getLogger(__name__)


def clean_roster(names: Iterable[object]) -> List[str]:
    """Trimmed, de-duplicated names without blanks or a header token."""
    cleaned: List[str] = []
    seen = set()
    for raw in names:
        if not isinstance(raw, str):
            continue
        name = raw.strip()
        if not name or name.lower() in ROSTER_HEADER_TOKENS or name in seen:
            continue
        seen.add(name)
        cleaned.append(name)
    return cleaned


class CaregiverService:
    def __init__(self, roster: RosterRepository, attendance_service: "AttendanceService"):
        self._roster = roster
        self._attendance_service = attendance_service

    def list_names(self) -> List[str]:
        names = clean_roster(self._roster.list_names())
        if not names:
            logger.warning("No caregivers found in roster")
        return names

    def list_people(self) -> List[Caregiver]:
        names = self.list_names()
        active = self._attendance_service.derive_active_person()

        people = []
        for name in names:
            is_active = active is not None and active.person_name == name
            people.append(
                Caregiver(
                    name=name,
                    is_active=is_active,
                    last_clock_in=format_for_store(active.clock_in) if is_active else None,
                )
            )
        return people
