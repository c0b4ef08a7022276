"""Stateless, HMAC-signed attendance tokens for QR check-in.

A token is the unpadded base64url encoding of
``"{session_id}:{issued_at_millis}:{signature}"`` where ``signature`` is the
first 12 lowercase hex characters of HMAC-SHA256 over
``"{session_id}:{issued_at_millis}"``. Nothing is stored server side, so a
token cannot be revoked before it expires.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
from functools import lru_cache
from typing import Callable

from app.config import get_settings
from app.domain.entities import (
    TOKEN_ERROR_EXPIRED,
    TOKEN_ERROR_FORGED,
    TOKEN_ERROR_MALFORMED,
    TokenValidation,
)
from app.utils import now_in_millis

TOKEN_TTL_MS = 15 * 60 * 1000
SIGNATURE_LENGTH = 12
DEFAULT_REFRESH_THRESHOLD_SECONDS = 60

_SEPARATOR = ":"

Clock = Callable[[], int]


class AttendanceTokenService:
    """Issue and verify attendance tokens bound to a session identifier."""

    def __init__(self, secret: str, *, clock: Clock | None = None) -> None:
        if not secret:
            raise ValueError("An attendance token secret is required")
        self._secret = secret.encode("utf-8")
        self._clock = clock or now_in_millis

    def issue(self, session_id: str) -> str:
        """Return a new token granting attendance to ``session_id``."""

        if not session_id:
            raise ValueError("session_id must not be empty")
        if _SEPARATOR in session_id:
            raise ValueError("session_id must not contain ':'")

        issued_at = self._clock()
        signature = self._sign(session_id, issued_at)
        raw = f"{session_id}{_SEPARATOR}{issued_at}{_SEPARATOR}{signature}"
        return base64.urlsafe_b64encode(raw.encode("utf-8")).rstrip(b"=").decode("ascii")

    def validate(self, token: str) -> TokenValidation:
        """Check ``token`` and report why it failed, never raising."""

        parts = self._decode(token)
        if parts is None:
            return TokenValidation.failure(TOKEN_ERROR_MALFORMED)

        session_id, issued_at, signature = parts
        if not self._signature_matches(session_id, issued_at, signature):
            return TokenValidation.failure(TOKEN_ERROR_FORGED)

        if self._clock() - issued_at > TOKEN_TTL_MS:
            return TokenValidation.failure(TOKEN_ERROR_EXPIRED, session_id=session_id)

        return TokenValidation.success(session_id)

    def expires_at_millis(self, token: str) -> int | None:
        """Return the expiry of a genuine token, ``None`` otherwise."""

        parts = self._decode(token)
        if parts is None:
            return None
        session_id, issued_at, signature = parts
        if not self._signature_matches(session_id, issued_at, signature):
            return None
        return issued_at + TOKEN_TTL_MS

    def remaining_seconds(self, token: str) -> int:
        """Whole seconds of validity left, 0 for expired or invalid tokens."""

        expires_at = self.expires_at_millis(token)
        if expires_at is None:
            return 0
        return max(0, (expires_at - self._clock()) // 1000)

    def format_remaining(self, token: str) -> str:
        """Render the remaining validity as an ``M:SS`` countdown."""

        minutes, seconds = divmod(self.remaining_seconds(token), 60)
        return f"{minutes}:{seconds:02d}"

    def should_refresh(
        self,
        token: str,
        threshold_seconds: int = DEFAULT_REFRESH_THRESHOLD_SECONDS,
    ) -> bool:
        """Return ``True`` when the token is still valid but about to expire."""

        remaining = self.remaining_seconds(token)
        return 0 < remaining < threshold_seconds

    def _sign(self, session_id: str, issued_at: int) -> str:
        message = f"{session_id}{_SEPARATOR}{issued_at}".encode("utf-8")
        digest = hmac.new(self._secret, message, hashlib.sha256).hexdigest()
        return digest[:SIGNATURE_LENGTH]

    def _signature_matches(self, session_id: str, issued_at: int, signature: str) -> bool:
        expected = self._sign(session_id, issued_at).encode("ascii")
        return hmac.compare_digest(expected, signature.encode("utf-8"))

    @staticmethod
    def _decode(token: str) -> tuple[str, int, str] | None:
        if not token or not isinstance(token, str):
            return None
        padded = token + "=" * (-len(token) % 4)
        try:
            raw = base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
        except (binascii.Error, UnicodeError, ValueError):
            return None

        parts = raw.split(_SEPARATOR)
        if len(parts) != 3:
            return None
        session_id, timestamp, signature = parts
        if not session_id or not signature:
            return None
        if not (timestamp.isascii() and timestamp.isdigit()):
            return None
        return session_id, int(timestamp), signature


@lru_cache
def get_attendance_token_service() -> AttendanceTokenService:
    """Return the service configured with ``ATTENDANCE_TOKEN_SECRET``."""

    return AttendanceTokenService(get_settings().attendance_token_secret)


__all__ = [
    "AttendanceTokenService",
    "DEFAULT_REFRESH_THRESHOLD_SECONDS",
    "SIGNATURE_LENGTH",
    "TOKEN_TTL_MS",
    "get_attendance_token_service",
]
