"""Public helpers for emitting and reading notifications."""

from .announcements import broadcast_announcement
from .fan_out import (
    BULK_GATED_TYPES,
    SINGLE_RECIPIENT_GATED_TYPES,
    FanOutResult,
    NotificationEvent,
    notify_bulk,
    notify_new_session,
    notify_one,
)
from .inbox import (
    count_unread_notifications,
    list_notifications,
    mark_all_notifications_read,
    mark_notifications_read,
)
from .preferences import get_notification_preferences, update_notification_preferences
from .reminders import ReminderSweepResult, send_session_reminders

__all__ = [
    "BULK_GATED_TYPES",
    "FanOutResult",
    "NotificationEvent",
    "ReminderSweepResult",
    "SINGLE_RECIPIENT_GATED_TYPES",
    "broadcast_announcement",
    "count_unread_notifications",
    "get_notification_preferences",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notifications_read",
    "notify_bulk",
    "notify_new_session",
    "notify_one",
    "send_session_reminders",
    "update_notification_preferences",
]
