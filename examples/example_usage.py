"""Example: drive the attendance service directly (no Flask).

Controllers are a thin layer; the clock-in/clock-out rules live in the services.
"""

import importlib
from datetime import datetime, timezone

from config import get_settings_module

from src.caregiver_clock.caregiver_clock.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, timeout_seconds=settings.STORE_TIMEOUT_SECONDS)

    for person in container.caregiver_service.list_people():
        print(person)

    active = container.attendance_service.derive_active_person()
    if active is not None:
        preview = container.attendance_service.preview_clock_out(active.person_name, datetime.now(timezone.utc).isoformat())
        print(f"{active.person_name} lleva {preview.hours:.2f} h (turno largo: {preview.is_long})")


if __name__ == "__main__":
    main()
