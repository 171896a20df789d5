from __future__ import annotations

from typing import Protocol, Sequence

from .model import StoredRow


class AttendanceRepository(Protocol):
    """Append-only row store for attendance sessions.

    Rows keep the store wire format (text timestamps in business time); the
    service owns parsing. Every method raises StoreUnavailable when the store
    cannot be reached.
    """

    def list_rows(self) -> Sequence[StoredRow]:
        raise NotImplementedError

    def append_row(
        self,
        *,
        clock_in_text: str,
        clock_out_text: str,
        person_name: str,
        total_hours_text: str,
    ) -> int:
        raise NotImplementedError

    def update_row(
        self,
        *,
        row_id: int,
        clock_out_text: str,
        person_name: str,
        total_hours_text: str,
    ) -> bool:
        """Overwrite the mutable fields of one existing row (used to close a session)."""

        raise NotImplementedError
