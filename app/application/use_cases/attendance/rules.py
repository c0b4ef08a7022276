"""Pure rules deciding when members may check in and how they are counted."""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime, timedelta

from app.domain.entities import AttendanceStats, AttendanceStatus

ON_TIME_GRACE_MINUTES = 10
LATE_LIMIT_MINUTES = 15
CHECK_IN_OPENS_BEFORE = timedelta(minutes=30)
DEFAULT_SESSION_LENGTH = timedelta(hours=2)


def calculate_late_minutes(session_start: datetime, checked_at: datetime) -> int:
    """Whole minutes between start and check-in; negative when early."""

    return math.floor((checked_at - session_start).total_seconds() / 60)


def determine_attendance_status(
    session_start: datetime, checked_at: datetime
) -> AttendanceStatus:
    late_minutes = calculate_late_minutes(session_start, checked_at)
    if late_minutes <= ON_TIME_GRACE_MINUTES:
        return AttendanceStatus.PRESENT
    if late_minutes <= LATE_LIMIT_MINUTES:
        return AttendanceStatus.LATE
    return AttendanceStatus.ABSENT


def can_check_in(
    session_start: datetime, session_end: datetime | None, now: datetime
) -> bool:
    """Return ``True`` inside the check-in window of a session.

    The window opens 30 minutes before the start and closes at the end of the
    session, or two hours after the start when no end is known.
    """

    opens_at = session_start - CHECK_IN_OPENS_BEFORE
    closes_at = session_end or session_start + DEFAULT_SESSION_LENGTH
    return opens_at <= now <= closes_at


def calculate_attendance_stats(statuses: Iterable[AttendanceStatus]) -> AttendanceStats:
    counts = {status: 0 for status in AttendanceStatus}
    for status in statuses:
        counts[AttendanceStatus(status)] += 1

    total = sum(counts.values())
    attended = (
        counts[AttendanceStatus.PRESENT]
        + counts[AttendanceStatus.LATE]
        + counts[AttendanceStatus.EXCUSED]
    )
    rate = round(attended / total * 100) if total else 0
    return AttendanceStats(
        present=counts[AttendanceStatus.PRESENT],
        late=counts[AttendanceStatus.LATE],
        absent=counts[AttendanceStatus.ABSENT],
        excused=counts[AttendanceStatus.EXCUSED],
        total=total,
        attendance_rate=rate,
    )


def check_in_message(status: AttendanceStatus, late_minutes: int | None = None) -> str:
    if status is AttendanceStatus.PRESENT:
        return "Check-in complete."
    if status is AttendanceStatus.LATE:
        return f"Checked in {late_minutes} minutes late."
    if status is AttendanceStatus.EXCUSED:
        return "Marked as excused."
    return "Checked in too late; recorded as absent."


__all__ = [
    "calculate_attendance_stats",
    "calculate_late_minutes",
    "can_check_in",
    "check_in_message",
    "determine_attendance_status",
]
