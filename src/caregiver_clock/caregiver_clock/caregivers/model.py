from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Caregiver:
    """Roster entry with state derived from the attendance records.

    Nothing here is persisted: ``is_active`` and ``last_clock_in`` are
    recomputed on every read.
    """

    name: str
    is_active: bool = False
    last_clock_in: Optional[str] = None
