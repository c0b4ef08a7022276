"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Notification categories exposed to clients."""

    SYSTEM = "SYSTEM"
    PROGRAM = "PROGRAM"
    PAYMENT = "PAYMENT"
    OTHER = "OTHER"
    ANNOUNCEMENT = "ANNOUNCEMENT"
    SESSION_REMINDER = "SESSION_REMINDER"
    NEW_SESSION = "NEW_SESSION"
    REPORT_COMMENT = "REPORT_COMMENT"


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: str | None
    user_id: str
    type: NotificationType
    title: str
    content: str | None = None
    link: str | None = None
    program_id: str | None = None
    session_id: str | None = None
    is_read: bool = False
    read_at: datetime | None = None
    created_at: datetime | None = None


__all__ = ["Notification", "NotificationType"]
