"""Timestamp normalization between callers, the domain and the record store.

Callers send absolute instants (ISO-8601 with an offset, or epoch
milliseconds). The store holds ``DD/MM/YYYY, HH:mm:ss`` wall-clock text in the
fixed business offset (see ``core.constants.BUSINESS_TZ``). Inside the domain
every instant is a timezone-aware ``datetime``.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Optional

from ..core.constants import BUSINESS_TZ, DATE_FORMAT, STORE_DATETIME_FORMAT
from ..core.exceptions import MalformedTimestamp, ValidationError

_EPOCH_MS_RE = re.compile(r"-?\d+(\.\d+)?")


def now_utc() -> datetime:
    """Current instant (aware, UTC).

    Note: Wrapped so tests can inject a fixed clock.
    """
    return datetime.now(timezone.utc)


def _from_iso(text: str) -> datetime:
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_instant(value: Any, field_name: str = "timestamp") -> datetime:
    """Parse a caller-supplied instant into an aware datetime.

    Accepts ISO-8601 text carrying an offset, or epoch milliseconds given as a
    number or numeric string. Naive ISO text is rejected because it does not
    name a single instant.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f"Falta el dato requerido: {field_name}")

    if isinstance(value, (int, float)):
        return _in_business_range(_from_epoch_ms(value, field_name), field_name, value)

    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Falta el dato requerido: {field_name}")

    text = value.strip()
    if _EPOCH_MS_RE.fullmatch(text):
        return _in_business_range(_from_epoch_ms(float(text), field_name), field_name, value)

    try:
        parsed = _from_iso(text)
    except ValueError:
        raise ValidationError(f"{field_name} no es una fecha válida: {value!r}") from None

    if parsed.tzinfo is None:
        raise ValidationError(f"{field_name} debe incluir la zona horaria: {value!r}")
    return _in_business_range(parsed, field_name, value)


def _in_business_range(instant: datetime, field_name: str, value: Any) -> datetime:
    # Instants must also be representable as business wall-clock time to be stored.
    try:
        instant.astimezone(BUSINESS_TZ)
    except OverflowError:
        raise ValidationError(f"{field_name} fuera de rango: {value!r}") from None
    return instant


def _from_epoch_ms(value: float, field_name: str) -> datetime:
    try:
        return datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise ValidationError(f"{field_name} fuera de rango: {value!r}") from None


def format_for_store(instant: datetime) -> str:
    """Render an aware instant as business-time store text."""
    if instant.tzinfo is None:
        raise ValueError("format_for_store requires an aware datetime")
    return instant.astimezone(BUSINESS_TZ).strftime(STORE_DATETIME_FORMAT)


def parse_stored(text: Optional[str]) -> datetime:
    """Parse store text back into an aware instant.

    Falls back to ISO-8601 for rows written by hand; naive values are read as
    business time. Raises MalformedTimestamp when neither format applies.
    """
    raw = (text or "").strip()
    if not raw:
        raise MalformedTimestamp(text)

    try:
        return datetime.strptime(raw, STORE_DATETIME_FORMAT).replace(tzinfo=BUSINESS_TZ)
    except ValueError:
        pass

    try:
        parsed = _from_iso(raw)
    except ValueError:
        raise MalformedTimestamp(text) from None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=BUSINESS_TZ)
    return parsed


def compute_hours(start: datetime, end: datetime) -> float:
    """Elapsed hours between two instants, full precision."""
    return (end - start).total_seconds() / 3600


def format_hours_for_store(hours: float) -> str:
    return f"{hours:.2f}"


def parse_stored_hours(text: Optional[str]) -> Optional[float]:
    raw = (text or "").strip()
    if not raw:
        return None
    try:
        return float(raw.replace(",", "."))
    except ValueError:
        return None


def business_date(instant: datetime) -> str:
    """Calendar date (YYYY-MM-DD) of an instant in business time."""
    return instant.astimezone(BUSINESS_TZ).strftime(DATE_FORMAT)
