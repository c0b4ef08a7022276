"""Use cases for issuing attendance tokens and reporting their countdown."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.application.use_cases.programs import SessionNotFoundError
from app.domain.entities import AttendanceTokenStatus, IssuedAttendanceToken
from app.infrastructure.attendance_tokens import (
    DEFAULT_REFRESH_THRESHOLD_SECONDS,
    AttendanceTokenService,
)
from app.infrastructure.repositories import ProgramRepository
from app.utils import datetime_from_millis

logger = logging.getLogger(__name__)


def issue_attendance_token(
    session: Session, token_service: AttendanceTokenService, *, session_id: str
) -> IssuedAttendanceToken:
    """Create a QR token for an existing session. The token is not stored."""

    if ProgramRepository(session).get_session(session_id) is None:
        raise SessionNotFoundError("Session not found")

    token = token_service.issue(session_id)
    expires_at = token_service.expires_at_millis(token)
    logger.info("Issued attendance token for session %s", session_id)
    return IssuedAttendanceToken(
        token=token,
        session_id=session_id,
        expires_at=datetime_from_millis(expires_at),
    )


def get_attendance_token_status(
    token_service: AttendanceTokenService,
    token: str,
    *,
    refresh_threshold_seconds: int = DEFAULT_REFRESH_THRESHOLD_SECONDS,
) -> AttendanceTokenStatus:
    validation = token_service.validate(token)
    return AttendanceTokenStatus(
        valid=validation.valid,
        remaining_seconds=token_service.remaining_seconds(token),
        countdown=token_service.format_remaining(token),
        should_refresh=token_service.should_refresh(token, refresh_threshold_seconds),
        error=validation.error,
    )


__all__ = ["get_attendance_token_status", "issue_attendance_token"]
