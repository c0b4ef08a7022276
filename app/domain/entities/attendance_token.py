"""Value objects produced by the attendance token service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

TOKEN_ERROR_MALFORMED = "malformed token"
TOKEN_ERROR_FORGED = "forged token"
TOKEN_ERROR_EXPIRED = "expired token"


@dataclass(frozen=True)
class TokenValidation:
    """Outcome of validating an attendance token.

    ``session_id`` is only populated when the signature was verified, which
    means it is present for valid and for expired tokens but never for
    malformed or forged ones.
    """

    valid: bool
    session_id: str | None = None
    error: str | None = None

    @classmethod
    def success(cls, session_id: str) -> "TokenValidation":
        return cls(valid=True, session_id=session_id)

    @classmethod
    def failure(cls, error: str, *, session_id: str | None = None) -> "TokenValidation":
        return cls(valid=False, session_id=session_id, error=error)


@dataclass(frozen=True)
class IssuedAttendanceToken:
    """Token handed out to an organizer together with its expiry."""

    token: str
    session_id: str
    expires_at: datetime


@dataclass(frozen=True)
class AttendanceTokenStatus:
    """Countdown information derived from a token string."""

    valid: bool
    remaining_seconds: int
    countdown: str
    should_refresh: bool
    error: str | None = None


__all__ = [
    "AttendanceTokenStatus",
    "IssuedAttendanceToken",
    "TOKEN_ERROR_EXPIRED",
    "TOKEN_ERROR_FORGED",
    "TOKEN_ERROR_MALFORMED",
    "TokenValidation",
]
