from __future__ import annotations

from typing import Protocol, Sequence


class RosterRepository(Protocol):
    """Read-only source of registered caregiver names (raw, in stored order)."""

    def list_names(self) -> Sequence[str]:
        raise NotImplementedError
