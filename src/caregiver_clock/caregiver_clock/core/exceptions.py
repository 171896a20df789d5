from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""

    code = "VALIDATION_ERROR"


class InvalidInterval(ValidationError):
    """Clock-out is not strictly after clock-in."""

    code = "INVALID_INTERVAL"


class ShiftTooLong(ValidationError):
    """A historical entry spans more than the maximum shift length."""

    code = "SHIFT_TOO_LONG"


class FutureEntry(ValidationError):
    """A historical entry starts after the submission time."""

    code = "FUTURE_ENTRY"


class SessionStateError(DomainError):
    """Base for clock-in/clock-out transitions refused by the current state."""

    code = "SESSION_STATE"


class AnotherSessionActive(SessionStateError):
    code = "ANOTHER_SESSION_ACTIVE"

    def __init__(self, active_person: str):
        super().__init__(f"{active_person} ya está fichado. Debe fichar salida primero.")
        self.active_person = active_person


class AlreadyActive(SessionStateError):
    code = "ALREADY_ACTIVE"

    def __init__(self, person_name: str):
        super().__init__(f"{person_name} ya está fichado.")
        self.person_name = person_name


class NoActiveSession(SessionStateError):
    code = "NO_ACTIVE_SESSION"

    def __init__(self, person_name: str):
        super().__init__(f"No se encontró registro de entrada activo para {person_name}")
        self.person_name = person_name


class ScheduleConflict(DomainError):
    """The candidate interval overlaps an existing session of the same caregiver.

    ``description`` is meant to be shown to the caller as is.
    """

    code = "SCHEDULE_CONFLICT"

    def __init__(self, description: str, record=None):
        super().__init__(f"Conflicto de horarios: {description}")
        self.description = description
        self.record = record


class MalformedTimestamp(DomainError):
    code = "MALFORMED_TIMESTAMP"

    def __init__(self, raw: Optional[str]):
        super().__init__(f"Fecha almacenada no válida: {raw!r}")
        self.raw = raw


class StoreUnavailable(Exception):
    """The record store is unreachable, unauthorized or misconfigured."""

    code = "STORE_UNAVAILABLE"
