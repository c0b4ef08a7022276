from .attendance import (
    AttendanceSummaryRead,
    AttendanceTokenRead,
    AttendanceTokenStatusRead,
    CheckInRead,
    CheckInRequest,
)
from .auth import Token
from .notification import (
    AnnouncementCreate,
    FanOutRead,
    MarkReadResponse,
    NotificationMarkReadRequest,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationRead,
    UnreadCountRead,
)
from .program import (
    ParticipantCreate,
    ParticipantRead,
    ProgramCreate,
    ProgramRead,
    ProgramSessionCreate,
    ProgramSessionRead,
    ScheduledSessionRead,
)

__all__ = [
    "AnnouncementCreate",
    "AttendanceSummaryRead",
    "AttendanceTokenRead",
    "AttendanceTokenStatusRead",
    "CheckInRead",
    "CheckInRequest",
    "FanOutRead",
    "MarkReadResponse",
    "NotificationMarkReadRequest",
    "NotificationPreferenceRead",
    "NotificationPreferenceUpdate",
    "NotificationRead",
    "ParticipantCreate",
    "ParticipantRead",
    "ProgramCreate",
    "ProgramRead",
    "ProgramSessionCreate",
    "ProgramSessionRead",
    "ScheduledSessionRead",
    "Token",
    "UnreadCountRead",
]
