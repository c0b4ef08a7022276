"""ORM models used by the application infrastructure."""

from .attendance import AttendanceModel
from .notification import NotificationModel
from .notification_preference import NotificationPreferenceModel
from .program import ProgramModel, ProgramParticipantModel, ProgramSessionModel
from .user import UserModel

__all__ = [
    "AttendanceModel",
    "NotificationModel",
    "NotificationPreferenceModel",
    "ProgramModel",
    "ProgramParticipantModel",
    "ProgramSessionModel",
    "UserModel",
]
