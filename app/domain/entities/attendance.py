"""Domain entities describing session attendance."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AttendanceStatus(str, Enum):
    """Outcome recorded for a participant in a session."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"
    EXCUSED = "EXCUSED"


CHECK_METHOD_QR = "QR"
CHECK_METHOD_MANUAL = "MANUAL"


@dataclass
class Attendance:
    """Attendance record of one participant for one session."""

    id: str | None
    session_id: str
    participant_id: str
    status: AttendanceStatus
    checked_at: datetime | None = None
    check_method: str = CHECK_METHOD_MANUAL
    late_minutes: int | None = None


@dataclass(frozen=True)
class AttendanceStats:
    """Aggregated counters for a list of attendance records."""

    present: int
    late: int
    absent: int
    excused: int
    total: int
    attendance_rate: int


__all__ = [
    "Attendance",
    "AttendanceStats",
    "AttendanceStatus",
    "CHECK_METHOD_MANUAL",
    "CHECK_METHOD_QR",
]
