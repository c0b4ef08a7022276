"""Read and update the notification settings of a user."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreference
from app.domain.entities.notification_preference import (
    MAX_REMINDER_HOURS_BEFORE,
    MIN_REMINDER_HOURS_BEFORE,
)
from app.infrastructure.repositories import NotificationPreferenceRepository


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, int(value)))


def get_notification_preferences(
    session: Session, user_id: str
) -> NotificationPreference:
    """Return the stored settings or the opted-in defaults."""

    stored = NotificationPreferenceRepository(session).get_by_user(user_id)
    return stored or NotificationPreference.defaults_for(user_id)


def update_notification_preferences(
    session: Session,
    user_id: str,
    *,
    session_reminder: bool | None = None,
    new_session: bool | None = None,
    report_comment: bool | None = None,
    announcement: bool | None = None,
    reminder_hours_before: int | None = None,
    quiet_hours_start: int | None = None,
    quiet_hours_end: int | None = None,
) -> NotificationPreference:
    """Apply the provided changes to the settings owned by ``user_id``.

    Out of range values are clamped: the reminder lead time to 1-72 hours and
    quiet hours to 0-23.
    """

    current = get_notification_preferences(session, user_id)
    flags = {
        "session_reminder": session_reminder,
        "new_session": new_session,
        "report_comment": report_comment,
        "announcement": announcement,
    }
    changes: dict[str, object] = {
        name: bool(value) for name, value in flags.items() if value is not None
    }
    if reminder_hours_before is not None:
        changes["reminder_hours_before"] = _clamp(
            reminder_hours_before, MIN_REMINDER_HOURS_BEFORE, MAX_REMINDER_HOURS_BEFORE
        )
    if quiet_hours_start is not None:
        changes["quiet_hours_start"] = _clamp(quiet_hours_start, 0, 23)
    if quiet_hours_end is not None:
        changes["quiet_hours_end"] = _clamp(quiet_hours_end, 0, 23)

    updated = replace(current, **changes)
    return NotificationPreferenceRepository(session).save(updated)


__all__ = ["get_notification_preferences", "update_notification_preferences"]
