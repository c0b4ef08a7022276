"""Broadcast announcements to every active member."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import NotificationType
from app.infrastructure.repositories import UserRepository

from .fan_out import FanOutResult, NotificationEvent, notify_bulk


def broadcast_announcement(
    session: Session,
    *,
    title: str,
    content: str | None = None,
    link: str | None = None,
) -> FanOutResult:
    """Notify every active user who has not opted out of announcements."""

    if not title.strip():
        raise ValueError("An announcement title is required")

    recipients = UserRepository(session).list_active_ids()
    event = NotificationEvent(
        type=NotificationType.ANNOUNCEMENT,
        title=title.strip(),
        content=content,
        link=link,
    )
    return notify_bulk(session, recipients, event)


__all__ = ["broadcast_announcement"]
