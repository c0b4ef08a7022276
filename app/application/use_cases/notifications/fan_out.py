"""Create notification rows for one recipient or many, honouring preferences.

Two gating tables exist on purpose. The single recipient path checks four
categories while the bulk path only checks announcements and new sessions;
every other category reaches every recipient in bulk sends. Unifying the two
means editing ``BULK_GATED_TYPES`` only.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import TypeVar

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import Notification, NotificationPreference, NotificationType
from app.infrastructure.repositories import (
    NotificationPreferenceRepository,
    NotificationRepository,
    ProgramRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Category -> preference flag consulted before creating the notification.
SINGLE_RECIPIENT_GATED_TYPES: Mapping[NotificationType, str] = {
    NotificationType.ANNOUNCEMENT: "announcement",
    NotificationType.SESSION_REMINDER: "session_reminder",
    NotificationType.NEW_SESSION: "new_session",
    NotificationType.REPORT_COMMENT: "report_comment",
}

BULK_GATED_TYPES: Mapping[NotificationType, str] = {
    NotificationType.ANNOUNCEMENT: "announcement",
    NotificationType.NEW_SESSION: "new_session",
}


@dataclass(frozen=True)
class NotificationEvent:
    """Content shared by every notification created for one event."""

    type: NotificationType
    title: str
    content: str | None = None
    link: str | None = None
    program_id: str | None = None
    session_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", NotificationType(self.type))

    def for_user(self, user_id: str) -> Notification:
        return Notification(
            id=None,
            user_id=user_id,
            type=self.type,
            title=self.title,
            content=self.content,
            link=self.link,
            program_id=self.program_id,
            session_id=self.session_id,
        )


@dataclass(frozen=True)
class FanOutResult:
    """Number of notifications inserted by a fan-out."""

    count: int


def is_opted_in(
    preference: NotificationPreference | None,
    notification_type: NotificationType,
    gated_types: Mapping[NotificationType, str],
) -> bool:
    """Return ``False`` only when a stored flag disables ``notification_type``."""

    flag = gated_types.get(NotificationType(notification_type))
    if flag is None or preference is None:
        return True
    return bool(getattr(preference, flag))


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of ``items`` holding at most ``size`` entries."""

    if size <= 0:
        raise ValueError("size must be positive")
    for start in range(0, len(items), size):
        yield items[start : start + size]


def notify_one(
    session: Session, user_id: str, event: NotificationEvent
) -> Notification | None:
    """Create one notification unless the user opted out of its category."""

    preference = NotificationPreferenceRepository(session).get_by_user(user_id)
    if not is_opted_in(preference, event.type, SINGLE_RECIPIENT_GATED_TYPES):
        logger.debug("User %s opted out of %s notifications", user_id, event.type.value)
        return None
    return NotificationRepository(session).create(event.for_user(user_id))


def notify_bulk(
    session: Session,
    user_ids: Iterable[str],
    event: NotificationEvent,
    *,
    batch_size: int | None = None,
) -> FanOutResult:
    """Create one notification per entry of ``user_ids`` in sequential batches.

    Duplicated ids produce duplicated notifications. Batches are committed one
    by one, so a failing batch leaves the earlier ones in place and the
    database error propagates to the caller.
    """

    recipients = list(user_ids)
    requested = len(recipients)
    if not recipients:
        return FanOutResult(count=0)

    if event.type in BULK_GATED_TYPES:
        preferences = NotificationPreferenceRepository(session).get_map_by_user_ids(
            recipients
        )
        recipients = [
            user_id
            for user_id in recipients
            if is_opted_in(preferences.get(user_id), event.type, BULK_GATED_TYPES)
        ]
        if not recipients:
            return FanOutResult(count=0)

    size = batch_size or get_settings().notification_batch_size
    repository = NotificationRepository(session)
    total = 0
    for batch in chunked(recipients, size):
        total += repository.create_many([event.for_user(user_id) for user_id in batch])

    logger.info(
        "Created %s %s notifications out of %s requested",
        total,
        event.type.value,
        requested,
    )
    return FanOutResult(count=total)


def notify_new_session(
    session: Session, *, program_id: str, session_id: str, title: str
) -> FanOutResult:
    """Tell the approved participants of a program about a new session."""

    programs = ProgramRepository(session)
    program = programs.get(program_id)
    if program is None:
        return FanOutResult(count=0)

    participant_ids = programs.list_approved_participant_user_ids(program_id)
    if not participant_ids:
        return FanOutResult(count=0)

    event = NotificationEvent(
        type=NotificationType.NEW_SESSION,
        title=f"New session in {program.title}",
        content=f"'{title}' has been scheduled for {program.title}.",
        link=f"/programs/{program_id}/sessions/{session_id}",
        program_id=program_id,
        session_id=session_id,
    )
    return notify_bulk(session, participant_ids, event)


__all__ = [
    "BULK_GATED_TYPES",
    "FanOutResult",
    "NotificationEvent",
    "SINGLE_RECIPIENT_GATED_TYPES",
    "chunked",
    "is_opted_in",
    "notify_bulk",
    "notify_new_session",
    "notify_one",
]
