"""Repository implementations for infrastructure layer."""

from .attendance_repository import AttendanceRepository
from .notification_preference_repository import NotificationPreferenceRepository
from .notification_repository import NotificationRepository
from .program_repository import ProgramRepository
from .user_repository import UserRepository

__all__ = [
    "AttendanceRepository",
    "NotificationPreferenceRepository",
    "NotificationRepository",
    "ProgramRepository",
    "UserRepository",
]
