"""Tests for the scan-to-attend flow."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

import pytest

from app.application.use_cases.attendance import (
    CheckInError,
    check_in_with_token,
    get_attendance_token_status,
    get_session_attendance_summary,
    issue_attendance_token,
)
from app.application.use_cases.programs import SessionNotFoundError
from app.domain.entities import AttendanceStatus
from app.infrastructure.attendance_tokens import TOKEN_TTL_MS, AttendanceTokenService
from app.infrastructure.models import AttendanceModel
from app.infrastructure.repositories import AttendanceRepository
from app.utils import get_app_timezone

SECRET = "check-in-test-secret"


class FakeClock:
    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture()
def start() -> datetime:
    return datetime(2024, 5, 2, 19, 0, tzinfo=get_app_timezone())


@pytest.fixture()
def clock(start) -> FakeClock:
    return FakeClock(int(start.timestamp() * 1000))


@pytest.fixture()
def token_service(clock) -> AttendanceTokenService:
    return AttendanceTokenService(SECRET, clock=clock)


@pytest.fixture()
def enrolled(make_users, make_program, make_session, start):
    member, pending = make_users(2)
    program_id = make_program({member: "APPROVED", pending: "PENDING"})
    session_id = make_session(program_id, starts_at=start)
    return {"member": member, "pending": pending, "session_id": session_id}


def test_on_time_scan_records_presence(db_session, token_service, enrolled, start):
    token = token_service.issue(enrolled["session_id"])

    result = check_in_with_token(
        db_session,
        token_service,
        user_id=enrolled["member"],
        token=token,
        now=start + timedelta(minutes=5),
    )

    assert result.status is AttendanceStatus.PRESENT
    assert result.already_checked_in is False
    assert result.late_minutes is None


def test_second_scan_reports_existing_record(db_session, token_service, enrolled, start):
    token = token_service.issue(enrolled["session_id"])
    check_in_with_token(
        db_session, token_service, user_id=enrolled["member"], token=token, now=start
    )

    again = check_in_with_token(
        db_session,
        token_service,
        user_id=enrolled["member"],
        token=token,
        now=start + timedelta(minutes=12),
    )

    assert again.already_checked_in is True
    assert again.status is AttendanceStatus.PRESENT


def test_late_scan_keeps_minutes(db_session, token_service, enrolled, start):
    token = token_service.issue(enrolled["session_id"])

    result = check_in_with_token(
        db_session,
        token_service,
        user_id=enrolled["member"],
        token=token,
        now=start + timedelta(minutes=12),
    )

    assert result.status is AttendanceStatus.LATE
    assert result.late_minutes == 12


def test_scan_outside_window_is_rejected(db_session, token_service, enrolled, start):
    token = token_service.issue(enrolled["session_id"])

    with pytest.raises(CheckInError) as excinfo:
        check_in_with_token(
            db_session,
            token_service,
            user_id=enrolled["member"],
            token=token,
            now=start - timedelta(hours=1),
        )

    assert excinfo.value.reason == "outside check-in window"


def test_pending_participant_cannot_check_in(db_session, token_service, enrolled, start):
    token = token_service.issue(enrolled["session_id"])

    with pytest.raises(CheckInError) as excinfo:
        check_in_with_token(
            db_session, token_service, user_id=enrolled["pending"], token=token, now=start
        )

    assert excinfo.value.reason == "not a participant"


def test_expired_scan_is_logged_with_session_id(
    db_session, token_service, clock, enrolled, start, caplog
):
    token = token_service.issue(enrolled["session_id"])
    clock.now += TOKEN_TTL_MS + 1

    with caplog.at_level(logging.WARNING):
        with pytest.raises(CheckInError) as excinfo:
            check_in_with_token(
                db_session, token_service, user_id=enrolled["member"], token=token, now=start
            )

    assert excinfo.value.reason == "expired token"
    assert enrolled["session_id"] in caplog.text


def test_forged_scan_does_not_leak_session_id(
    db_session, clock, enrolled, start, caplog
):
    forged = AttendanceTokenService("some-other-secret", clock=clock).issue(
        enrolled["session_id"]
    )

    with caplog.at_level(logging.WARNING):
        with pytest.raises(CheckInError) as excinfo:
            check_in_with_token(
                db_session,
                AttendanceTokenService(SECRET, clock=clock),
                user_id=enrolled["member"],
                token=forged,
                now=start,
            )

    assert excinfo.value.reason == "forged token"
    assert "forged token" in caplog.text
    assert enrolled["session_id"] not in caplog.text


def test_token_for_unknown_session(db_session, token_service, enrolled, start):
    token = token_service.issue("missing-session")

    with pytest.raises(SessionNotFoundError):
        check_in_with_token(
            db_session, token_service, user_id=enrolled["member"], token=token, now=start
        )


def test_issue_token_requires_existing_session(db_session, token_service, enrolled):
    issued = issue_attendance_token(
        db_session, token_service, session_id=enrolled["session_id"]
    )

    assert issued.session_id == enrolled["session_id"]
    assert token_service.validate(issued.token).valid is True
    with pytest.raises(SessionNotFoundError):
        issue_attendance_token(db_session, token_service, session_id="missing")


def test_token_status_reports_countdown(token_service, clock):
    token = token_service.issue("s1")
    clock.now += 14 * 60 * 1000 + 15 * 1000

    status = get_attendance_token_status(token_service, token)

    assert status.valid is True
    assert status.remaining_seconds == 45
    assert status.countdown == "0:45"
    assert status.should_refresh is True


def test_summary_counts_recorded_statuses(
    db_session, token_service, make_users, make_program, make_session, start
):
    early, late, very_late = make_users(3)
    program_id = make_program({early: "APPROVED", late: "APPROVED", very_late: "APPROVED"})
    session_id = make_session(program_id, starts_at=start)
    token = token_service.issue(session_id)

    for user_id, minutes in ((early, 0), (late, 13), (very_late, 40)):
        check_in_with_token(
            db_session,
            token_service,
            user_id=user_id,
            token=token,
            now=start + timedelta(minutes=minutes),
        )

    stats = get_session_attendance_summary(db_session, session_id=session_id)

    assert (stats.present, stats.late, stats.absent) == (1, 1, 1)
    assert stats.attendance_rate == 67


def test_concurrent_scan_reports_existing_record(
    db_session, token_service, enrolled, start, monkeypatch
):
    token = token_service.issue(enrolled["session_id"])
    check_in_with_token(
        db_session, token_service, user_id=enrolled["member"], token=token, now=start
    )
    original = AttendanceRepository.get_for_participant
    reads: list[dict] = []

    def stale_first_read(self, **kwargs):
        reads.append(kwargs)
        if len(reads) == 1:
            return None
        return original(self, **kwargs)

    monkeypatch.setattr(AttendanceRepository, "get_for_participant", stale_first_read)

    result = check_in_with_token(
        db_session,
        token_service,
        user_id=enrolled["member"],
        token=token,
        now=start + timedelta(minutes=1),
    )

    assert result.already_checked_in is True
    assert result.status is AttendanceStatus.PRESENT
    assert db_session.query(AttendanceModel).count() == 1
