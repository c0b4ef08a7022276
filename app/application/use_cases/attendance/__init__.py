"""Use cases for QR based session attendance."""

from .check_in import (
    CheckInError,
    CheckInResult,
    check_in_with_token,
    get_session_attendance_summary,
)
from .rules import (
    calculate_attendance_stats,
    calculate_late_minutes,
    can_check_in,
    determine_attendance_status,
)
from .tokens import get_attendance_token_status, issue_attendance_token

__all__ = [
    "CheckInError",
    "CheckInResult",
    "calculate_attendance_stats",
    "calculate_late_minutes",
    "can_check_in",
    "check_in_with_token",
    "determine_attendance_status",
    "get_attendance_token_status",
    "get_session_attendance_summary",
    "issue_attendance_token",
]
