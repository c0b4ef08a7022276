"""Scan-to-attend flow backed by attendance tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.application.use_cases.programs import SessionNotFoundError
from app.domain.entities import (
    CHECK_METHOD_QR,
    TOKEN_ERROR_EXPIRED,
    Attendance,
    AttendanceStats,
    AttendanceStatus,
)
from app.infrastructure.attendance_tokens import AttendanceTokenService
from app.infrastructure.repositories import AttendanceRepository, ProgramRepository
from app.utils import ensure_app_timezone, now_in_app_timezone

from .rules import (
    calculate_attendance_stats,
    calculate_late_minutes,
    can_check_in,
    check_in_message,
    determine_attendance_status,
)

logger = logging.getLogger(__name__)


class CheckInError(ValueError):
    """Raised when a check-in request cannot be honoured."""

    def __init__(self, message: str, *, reason: str) -> None:
        super().__init__(message)
        self.reason = reason


@dataclass(frozen=True)
class CheckInResult:
    session_id: str
    status: AttendanceStatus
    message: str
    already_checked_in: bool = False
    late_minutes: int | None = None


def _already_recorded(attendance: Attendance) -> CheckInResult:
    return CheckInResult(
        session_id=attendance.session_id,
        status=attendance.status,
        message="Attendance was already recorded.",
        already_checked_in=True,
        late_minutes=attendance.late_minutes,
    )


def check_in_with_token(
    session: Session,
    token_service: AttendanceTokenService,
    *,
    user_id: str,
    token: str,
    now: datetime | None = None,
) -> CheckInResult:
    """Record the attendance of ``user_id`` for the session encoded in ``token``."""

    validation = token_service.validate(token)
    if not validation.valid:
        if validation.error == TOKEN_ERROR_EXPIRED:
            logger.warning(
                "Expired attendance token scanned for session %s by user %s",
                validation.session_id,
                user_id,
            )
        else:
            logger.warning("Rejected %s from user %s", validation.error, user_id)
        raise CheckInError("The QR code is not valid", reason=validation.error or "invalid")

    session_id = validation.session_id
    programs = ProgramRepository(session)
    program_session = programs.get_session(session_id)
    if program_session is None:
        raise SessionNotFoundError("Session not found")

    participant = programs.get_participant(
        program_id=program_session.program_id, user_id=user_id
    )
    if participant is None or not participant.is_approved:
        raise CheckInError(
            "You are not a participant of this program", reason="not a participant"
        )

    attendances = AttendanceRepository(session)
    existing = attendances.get_for_participant(
        session_id=session_id, participant_id=participant.id
    )
    if existing is not None and existing.status is not AttendanceStatus.ABSENT:
        return _already_recorded(existing)

    current = ensure_app_timezone(now) if now else now_in_app_timezone()
    starts_at = ensure_app_timezone(program_session.starts_at)
    if not can_check_in(starts_at, ensure_app_timezone(program_session.ends_at), current):
        raise CheckInError(
            "Check-in is not open for this session", reason="outside check-in window"
        )

    status = determine_attendance_status(starts_at, current)
    late_minutes = (
        calculate_late_minutes(starts_at, current)
        if status is AttendanceStatus.LATE
        else None
    )
    record = Attendance(
        id=existing.id if existing else None,
        session_id=session_id,
        participant_id=participant.id,
        status=status,
        checked_at=current,
        check_method=CHECK_METHOD_QR,
        late_minutes=late_minutes,
    )
    if existing is None:
        try:
            attendances.create(record)
        except IntegrityError:
            # A concurrent scan inserted the row after our read.
            session.rollback()
            winner = attendances.get_for_participant(
                session_id=session_id, participant_id=participant.id
            )
            if winner is None:
                raise
            logger.info(
                "Concurrent check-in for session %s by user %s", session_id, user_id
            )
            return _already_recorded(winner)
    else:
        attendances.update(record)

    return CheckInResult(
        session_id=session_id,
        status=status,
        message=check_in_message(status, late_minutes),
        late_minutes=late_minutes,
    )


def get_session_attendance_summary(session: Session, *, session_id: str) -> AttendanceStats:
    if ProgramRepository(session).get_session(session_id) is None:
        raise SessionNotFoundError("Session not found")
    records = AttendanceRepository(session).list_for_session(session_id)
    return calculate_attendance_stats(record.status for record in records)


__all__ = [
    "CheckInError",
    "CheckInResult",
    "check_in_with_token",
    "get_session_attendance_summary",
]
