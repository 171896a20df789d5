from __future__ import annotations

from dataclasses import dataclass

from .attendance.conflicts import ConflictDetector
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .caregivers.mysql_roster_repository import MySQLRosterRepository
from .caregivers.repository import RosterRepository
from .caregivers.service import CaregiverService
from .core.constants import DEFAULT_STORE_TIMEOUT_SECONDS
from .database.connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    roster_repo: RosterRepository

    attendance_service: AttendanceService
    caregiver_service: CaregiverService


def build_services(attendance_repo: AttendanceRepository, roster_repo: RosterRepository, *, clock=None) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    attendance_service = AttendanceService(
        attendance_repo,
        roster_repo,
        conflicts=ConflictDetector(),
        clock=clock,
    )
    caregiver_service = CaregiverService(roster_repo, attendance_service)

    return Container(
        attendance_repo=attendance_repo,
        roster_repo=roster_repo,
        attendance_service=attendance_service,
        caregiver_service=caregiver_service,
    )


def build_container(*, db_config: dict, timeout_seconds: int = DEFAULT_STORE_TIMEOUT_SECONDS) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        timeout_seconds=int(timeout_seconds),
    )
    conn = DatabaseConnection.get_instance(config)

    return build_services(MySQLAttendanceRepository(conn), MySQLRosterRepository(conn))
