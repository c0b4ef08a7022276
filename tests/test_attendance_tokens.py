"""Tests for issuing and validating attendance tokens."""

from __future__ import annotations

import base64

import pytest

from app.domain.entities import (
    TOKEN_ERROR_EXPIRED,
    TOKEN_ERROR_FORGED,
    TOKEN_ERROR_MALFORMED,
)
from app.infrastructure.attendance_tokens import (
    SIGNATURE_LENGTH,
    TOKEN_TTL_MS,
    AttendanceTokenService,
)

SECRET = "unit-test-secret-value"
ISSUED_AT = 1_700_000_000_000


class FakeClock:
    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(ISSUED_AT)


@pytest.fixture()
def service(clock: FakeClock) -> AttendanceTokenService:
    return AttendanceTokenService(SECRET, clock=clock)


def _encode(raw: str) -> str:
    return base64.urlsafe_b64encode(raw.encode("utf-8")).rstrip(b"=").decode("ascii")


def _decode(token: str) -> str:
    return base64.urlsafe_b64decode(token + "=" * (-len(token) % 4)).decode("utf-8")


def test_issued_token_validates_and_returns_session_id(service):
    token = service.issue("session-42")

    result = service.validate(token)

    assert result.valid is True
    assert result.session_id == "session-42"
    assert result.error is None


def test_token_layout_is_unpadded_base64url(service):
    token = service.issue("abc")

    assert "=" not in token
    assert "+" not in token and "/" not in token
    session_id, issued_at, signature = _decode(token).split(":")
    assert session_id == "abc"
    assert int(issued_at) == ISSUED_AT
    assert len(signature) == SIGNATURE_LENGTH
    assert all(char in "0123456789abcdef" for char in signature)


def test_token_is_valid_until_the_ttl_elapses(service, clock):
    token = service.issue("s1")

    clock.advance(TOKEN_TTL_MS)
    assert service.validate(token).valid is True

    clock.advance(1)
    result = service.validate(token)
    assert result.valid is False
    assert result.error == TOKEN_ERROR_EXPIRED
    assert result.session_id == "s1"


def test_tampered_signature_is_reported_as_forged(service):
    forged = _encode(f"s1:{ISSUED_AT}:{'0' * SIGNATURE_LENGTH}")

    result = service.validate(forged)

    assert result.valid is False
    assert result.error == TOKEN_ERROR_FORGED
    assert result.session_id is None


def test_token_signed_with_another_secret_is_forged(clock):
    other = AttendanceTokenService("another-secret-value", clock=clock)
    token = other.issue("s1")

    result = AttendanceTokenService(SECRET, clock=clock).validate(token)

    assert result.error == TOKEN_ERROR_FORGED


def test_swapping_the_session_id_invalidates_the_signature(service):
    token = service.issue("s1")
    _, issued_at, signature = _decode(token).split(":")

    result = service.validate(_encode(f"s2:{issued_at}:{signature}"))

    assert result.error == TOKEN_ERROR_FORGED


@pytest.mark.parametrize(
    "token",
    [
        "",
        "***not base64***",
        _encode("only:two"),
        _encode("a:b:c:d"),
        _encode("s1:not-a-number:abcdef012345"),
        _encode(":1700000000000:abcdef012345"),
        _encode("s1:1700000000000:"),
        _encode("s1:²:abcdef012345"),
    ],
)
def test_malformed_tokens_never_raise(service, token):
    result = service.validate(token)

    assert result.valid is False
    assert result.error == TOKEN_ERROR_MALFORMED
    assert result.session_id is None


def test_remaining_time_helpers_follow_the_clock(service, clock):
    token = service.issue("s1")

    assert service.remaining_seconds(token) == 900
    assert service.format_remaining(token) == "15:00"
    assert service.should_refresh(token) is False

    clock.advance(14 * 60 * 1000 + 30 * 1000)
    assert service.remaining_seconds(token) == 30
    assert service.format_remaining(token) == "0:30"
    assert service.should_refresh(token) is True

    clock.advance(60 * 1000)
    assert service.remaining_seconds(token) == 0
    assert service.format_remaining(token) == "0:00"
    assert service.should_refresh(token) is False


def test_remaining_time_is_zero_for_invalid_tokens(service):
    forged = _encode(f"s1:{ISSUED_AT}:{'f' * SIGNATURE_LENGTH}")

    assert service.remaining_seconds("garbage") == 0
    assert service.remaining_seconds(forged) == 0
    assert service.expires_at_millis(forged) is None


def test_expiry_is_issue_time_plus_ttl(service):
    token = service.issue("s1")

    assert service.expires_at_millis(token) == ISSUED_AT + TOKEN_TTL_MS


@pytest.mark.parametrize("session_id", ["", "has:colon"])
def test_issue_rejects_unusable_session_ids(service, session_id):
    with pytest.raises(ValueError):
        service.issue(session_id)


def test_service_requires_a_secret():
    with pytest.raises(ValueError):
        AttendanceTokenService("")


def test_token_expires_between_fourteen_and_sixteen_minutes():
    clock = FakeClock(1_000_000)
    service = AttendanceTokenService(SECRET, clock=clock)
    token = service.issue("session-42")

    clock.now = 1_000_000 + 14 * 60 * 1000
    assert service.validate(token).valid is True

    clock.now = 1_000_000 + 16 * 60 * 1000
    result = service.validate(token)
    assert result.valid is False
    assert result.error == TOKEN_ERROR_EXPIRED
    assert result.session_id == "session-42"


def test_changing_any_signature_character_is_forged(service):
    session_id, issued_at, signature = _decode(service.issue("s1")).split(":")

    for index, char in enumerate(signature):
        replacement = "0" if char != "0" else "1"
        tampered = signature[:index] + replacement + signature[index + 1 :]
        result = service.validate(_encode(f"{session_id}:{issued_at}:{tampered}"))
        assert result.error == TOKEN_ERROR_FORGED, index
