"""Use cases for creating programs, enrolling members and scheduling sessions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from app.application.use_cases.notifications import notify_new_session
from app.domain.entities import (
    PARTICIPANT_STATUS_APPROVED,
    PARTICIPANT_STATUSES,
    Program,
    ProgramParticipant,
    ProgramSession,
)
from app.infrastructure.repositories import ProgramRepository, UserRepository
from app.utils import ensure_app_timezone

from .errors import ProgramNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduledSession:
    """A freshly created session and the number of members notified."""

    session: ProgramSession
    notified: int


def create_program(session: Session, *, title: str) -> Program:
    """Persist a new program."""

    if not title.strip():
        raise ValueError("A program title is required")
    return ProgramRepository(session).create(Program(id=None, title=title.strip()))


def add_participant(
    session: Session,
    *,
    program_id: str,
    user_id: str,
    status: str = PARTICIPANT_STATUS_APPROVED,
) -> ProgramParticipant:
    """Enroll ``user_id`` in a program with the given membership status."""

    normalized_status = status.upper()
    if normalized_status not in PARTICIPANT_STATUSES:
        raise ValueError(f"Unknown participant status '{status}'")

    programs = ProgramRepository(session)
    if programs.get(program_id) is None:
        raise ProgramNotFoundError("Program not found")
    if UserRepository(session).get(user_id) is None:
        raise LookupError("User not found")
    if programs.get_participant(program_id=program_id, user_id=user_id):
        raise ValueError("User is already enrolled in this program")

    return programs.add_participant(
        ProgramParticipant(
            id=None,
            program_id=program_id,
            user_id=user_id,
            status=normalized_status,
        )
    )


def create_program_session(
    session: Session,
    *,
    program_id: str,
    session_no: int,
    title: str,
    starts_at: datetime,
    ends_at: datetime | None = None,
) -> ScheduledSession:
    """Schedule a session and notify the program's approved participants."""

    programs = ProgramRepository(session)
    if programs.get(program_id) is None:
        raise ProgramNotFoundError("Program not found")
    starts_at = ensure_app_timezone(starts_at)
    ends_at = ensure_app_timezone(ends_at)
    if session_no < 1:
        raise ValueError("Session number must be positive")
    if ends_at is not None and ends_at <= starts_at:
        raise ValueError("A session must end after it starts")

    created = programs.create_session(
        ProgramSession(
            id=None,
            program_id=program_id,
            session_no=session_no,
            title=title,
            starts_at=starts_at,
            ends_at=ends_at,
        )
    )
    result = notify_new_session(
        session, program_id=program_id, session_id=created.id, title=created.title
    )
    logger.info(
        "Scheduled session %s for program %s, notified %s participants",
        created.id,
        program_id,
        result.count,
    )
    return ScheduledSession(session=created, notified=result.count)


__all__ = [
    "ScheduledSession",
    "add_participant",
    "create_program",
    "create_program_session",
]
