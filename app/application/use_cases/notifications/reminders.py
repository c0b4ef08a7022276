"""Scheduled sweep that reminds participants about upcoming sessions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import NotificationType, ProgramSession
from app.infrastructure.repositories import ProgramRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

from .fan_out import NotificationEvent, notify_one

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReminderSweepResult:
    """Summary of a reminder sweep run."""

    sessions: int
    notifications: int


def _reminder_event(program_session: ProgramSession, program_title: str) -> NotificationEvent:
    starts_at = ensure_app_timezone(program_session.starts_at)
    return NotificationEvent(
        type=NotificationType.SESSION_REMINDER,
        title=f"Upcoming: {program_title} session {program_session.session_no}",
        content=(
            f"'{program_session.title}' starts at "
            f"{starts_at:%Y-%m-%d %H:%M}."
        ),
        link=f"/programs/{program_session.program_id}/sessions/{program_session.id}",
        program_id=program_session.program_id,
        session_id=program_session.id,
    )


def send_session_reminders(
    session: Session,
    *,
    now: datetime | None = None,
    window_hours: int | None = None,
) -> ReminderSweepResult:
    """Remind approved participants of sessions starting within the window.

    Each session is stamped with ``reminder_sent_at`` once processed, so a
    later run skips it.
    """

    current = ensure_app_timezone(now) if now else now_in_app_timezone()
    hours = window_hours or get_settings().session_reminder_window_hours
    programs = ProgramRepository(session)

    pending = programs.list_sessions_pending_reminder(
        start=current, end=current + timedelta(hours=hours)
    )
    sent = 0
    for program_session in pending:
        program = programs.get(program_session.program_id)
        if program is None:
            continue
        event = _reminder_event(program_session, program.title)
        for user_id in programs.list_approved_participant_user_ids(program.id):
            if notify_one(session, user_id, event) is not None:
                sent += 1
        programs.mark_reminder_sent(program_session.id, when=current)

    logger.info(
        "Session reminder sweep processed %s sessions and created %s notifications",
        len(pending),
        sent,
    )
    return ReminderSweepResult(sessions=len(pending), notifications=sent)


__all__ = ["ReminderSweepResult", "send_session_reminders"]
