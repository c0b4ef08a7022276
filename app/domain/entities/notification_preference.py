"""Per-user notification settings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_REMINDER_HOURS_BEFORE = 24
DEFAULT_QUIET_HOURS_START = 22
DEFAULT_QUIET_HOURS_END = 8

MIN_REMINDER_HOURS_BEFORE = 1
MAX_REMINDER_HOURS_BEFORE = 72


@dataclass
class NotificationPreference:
    """Opt-in flags and timing settings owned by a single user.

    A user without a stored row is treated as opted in to every category.
    """

    user_id: str
    session_reminder: bool = True
    new_session: bool = True
    report_comment: bool = True
    announcement: bool = True
    reminder_hours_before: int = DEFAULT_REMINDER_HOURS_BEFORE
    quiet_hours_start: int = DEFAULT_QUIET_HOURS_START
    quiet_hours_end: int = DEFAULT_QUIET_HOURS_END
    id: str | None = None
    updated_at: datetime | None = None

    @classmethod
    def defaults_for(cls, user_id: str) -> "NotificationPreference":
        return cls(user_id=user_id)


__all__ = [
    "DEFAULT_QUIET_HOURS_END",
    "DEFAULT_QUIET_HOURS_START",
    "DEFAULT_REMINDER_HOURS_BEFORE",
    "MAX_REMINDER_HOURS_BEFORE",
    "MIN_REMINDER_HOURS_BEFORE",
    "NotificationPreference",
]
