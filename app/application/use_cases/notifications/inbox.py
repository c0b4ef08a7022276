"""Use cases for reading and acknowledging notifications."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session,
    user_id: str,
    *,
    unread_only: bool = False,
    limit: int | None = 50,
) -> Sequence[Notification]:
    """Return the most recent notifications owned by ``user_id``."""

    return NotificationRepository(session).list_for_user(
        user_id, unread_only=unread_only, limit=limit
    )


def count_unread_notifications(session: Session, user_id: str) -> int:
    return NotificationRepository(session).count_unread(user_id)


def mark_notifications_read(
    session: Session, notification_ids: Iterable[str], *, user_id: str
) -> int:
    """Flag the given notifications as read.

    Identifiers owned by other users are ignored.
    """

    unique_ids = list(dict.fromkeys(notification_ids))
    return NotificationRepository(session).mark_as_read(unique_ids, user_id=user_id)


def mark_all_notifications_read(session: Session, *, user_id: str) -> int:
    return NotificationRepository(session).mark_all_as_read(user_id=user_id)


__all__ = [
    "count_unread_notifications",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notifications_read",
]
