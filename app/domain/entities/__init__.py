"""Domain entities exposed by the application."""

from .attendance import (
    CHECK_METHOD_MANUAL,
    CHECK_METHOD_QR,
    Attendance,
    AttendanceStats,
    AttendanceStatus,
)
from .attendance_token import (
    TOKEN_ERROR_EXPIRED,
    TOKEN_ERROR_FORGED,
    TOKEN_ERROR_MALFORMED,
    AttendanceTokenStatus,
    IssuedAttendanceToken,
    TokenValidation,
)
from .notification import Notification, NotificationType
from .notification_preference import NotificationPreference
from .program import (
    PARTICIPANT_STATUS_APPROVED,
    PARTICIPANT_STATUS_PENDING,
    PARTICIPANT_STATUS_REJECTED,
    PARTICIPANT_STATUSES,
    Program,
    ProgramParticipant,
    ProgramSession,
)
from .user import ROLE_ADMIN, ROLE_MEMBER, User

__all__ = [
    "Attendance",
    "AttendanceStats",
    "AttendanceStatus",
    "AttendanceTokenStatus",
    "CHECK_METHOD_MANUAL",
    "CHECK_METHOD_QR",
    "IssuedAttendanceToken",
    "Notification",
    "NotificationPreference",
    "NotificationType",
    "PARTICIPANT_STATUS_APPROVED",
    "PARTICIPANT_STATUS_PENDING",
    "PARTICIPANT_STATUS_REJECTED",
    "PARTICIPANT_STATUSES",
    "Program",
    "ProgramParticipant",
    "ProgramSession",
    "ROLE_ADMIN",
    "ROLE_MEMBER",
    "TOKEN_ERROR_EXPIRED",
    "TOKEN_ERROR_FORGED",
    "TOKEN_ERROR_MALFORMED",
    "TokenValidation",
    "User",
]
