"""Tests for notification fan-out, preference gating and batching."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import (
    NotificationEvent,
    notify_bulk,
    notify_new_session,
    notify_one,
)
from app.domain.entities import NotificationPreference, NotificationType
from app.infrastructure.models import NotificationModel
from app.infrastructure.repositories import (
    NotificationPreferenceRepository,
    NotificationRepository,
)


@pytest.fixture()
def batch_sizes(monkeypatch):
    """Record the size of every bulk insert."""

    sizes: list[int] = []
    original = NotificationRepository.create_many

    def spy(self, notifications):
        sizes.append(len(notifications))
        return original(self, notifications)

    monkeypatch.setattr(NotificationRepository, "create_many", spy)
    return sizes


def _opt_out(session, user_id: str, **flags: bool) -> None:
    NotificationPreferenceRepository(session).save(
        NotificationPreference(user_id=user_id, **flags)
    )


def _stored(session, **filters) -> int:
    return session.query(NotificationModel).filter_by(**filters).count()


def test_bulk_send_is_split_in_sequential_batches(db_session, make_users, batch_sizes):
    user_ids = make_users(250)
    event = NotificationEvent(type=NotificationType.SYSTEM, title="Maintenance")

    result = notify_bulk(db_session, user_ids, event, batch_size=100)

    assert result.count == 250
    assert batch_sizes == [100, 100, 50]
    assert _stored(db_session) == 250


def test_batch_size_defaults_to_configuration(db_session, make_users, batch_sizes):
    user_ids = make_users(101)

    notify_bulk(db_session, user_ids, NotificationEvent(type="SYSTEM", title="Hello"))

    assert batch_sizes == [100, 1]


def test_duplicate_recipients_are_not_collapsed(db_session, make_users):
    (user_id,) = make_users(1)
    event = NotificationEvent(type=NotificationType.PROGRAM, title="Reminder")

    result = notify_bulk(db_session, [user_id, user_id], event)

    assert result.count == 2
    assert _stored(db_session, user_id=user_id) == 2


def test_empty_recipient_list_writes_nothing(db_session, batch_sizes):
    result = notify_bulk(db_session, [], NotificationEvent(type="SYSTEM", title="x"))

    assert result.count == 0
    assert batch_sizes == []


def test_bulk_announcement_skips_opted_out_users(db_session, make_users):
    keen, muted = make_users(2)
    _opt_out(db_session, muted, announcement=False)
    event = NotificationEvent(type=NotificationType.ANNOUNCEMENT, title="News")

    result = notify_bulk(db_session, [keen, muted], event)

    assert result.count == 1
    assert _stored(db_session, user_id=keen) == 1
    assert _stored(db_session, user_id=muted) == 0


def test_bulk_send_with_everyone_opted_out_writes_nothing(
    db_session, make_users, batch_sizes
):
    user_ids = make_users(2)
    for user_id in user_ids:
        _opt_out(db_session, user_id, new_session=False)

    result = notify_bulk(
        db_session, user_ids, NotificationEvent(type="NEW_SESSION", title="Session 3")
    )

    assert result.count == 0
    assert batch_sizes == []


def test_bulk_session_reminder_ignores_preferences(db_session, make_users):
    (user_id,) = make_users(1)
    _opt_out(db_session, user_id, session_reminder=False, report_comment=False)

    for notification_type in ("SESSION_REMINDER", "REPORT_COMMENT"):
        result = notify_bulk(
            db_session, [user_id], NotificationEvent(type=notification_type, title="t")
        )
        assert result.count == 1


def test_single_recipient_respects_all_gated_flags(db_session, make_users):
    (user_id,) = make_users(1)
    _opt_out(
        db_session,
        user_id,
        announcement=False,
        session_reminder=False,
        new_session=False,
        report_comment=False,
    )

    for notification_type in (
        NotificationType.ANNOUNCEMENT,
        NotificationType.SESSION_REMINDER,
        NotificationType.NEW_SESSION,
        NotificationType.REPORT_COMMENT,
    ):
        event = NotificationEvent(type=notification_type, title="gated")
        assert notify_one(db_session, user_id, event) is None

    created = notify_one(db_session, user_id, NotificationEvent(type="PAYMENT", title="Paid"))
    assert created is not None
    assert created.type is NotificationType.PAYMENT
    assert created.is_read is False


def test_user_without_preferences_is_opted_in(db_session, make_users):
    (user_id,) = make_users(1)

    created = notify_one(
        db_session,
        user_id,
        NotificationEvent(type=NotificationType.ANNOUNCEMENT, title="Welcome", link="/news"),
    )

    assert created is not None
    assert created.link == "/news"


def test_failing_batch_keeps_earlier_batches(db_session, make_users, monkeypatch):
    user_ids = make_users(150)
    original = NotificationRepository.create_many
    calls: list[int] = []

    def flaky(self, notifications):
        calls.append(len(notifications))
        if len(calls) == 2:
            raise SQLAlchemyError("disk full")
        return original(self, notifications)

    monkeypatch.setattr(NotificationRepository, "create_many", flaky)

    with pytest.raises(SQLAlchemyError):
        notify_bulk(
            db_session, user_ids, NotificationEvent(type="SYSTEM", title="x"), batch_size=100
        )

    db_session.rollback()
    assert _stored(db_session) == 100


def test_new_session_notifies_approved_participants(db_session, make_users, make_program):
    approved, pending, rejected = make_users(3)
    program_id = make_program(
        {approved: "APPROVED", pending: "PENDING", rejected: "REJECTED"},
        title="Philosophy Circle",
    )

    result = notify_new_session(
        db_session, program_id=program_id, session_id="session-1", title="Plato"
    )

    assert result.count == 1
    notification = NotificationRepository(db_session).list_for_user(approved)[0]
    assert notification.type is NotificationType.NEW_SESSION
    assert notification.title == "New session in Philosophy Circle"
    assert notification.link == f"/programs/{program_id}/sessions/session-1"
    assert notification.program_id == program_id


def test_new_session_for_unknown_or_empty_program(db_session, make_program, batch_sizes):
    empty_program = make_program()

    assert notify_new_session(
        db_session, program_id="missing", session_id="s", title="t"
    ).count == 0
    assert notify_new_session(
        db_session, program_id=empty_program, session_id="s", title="t"
    ).count == 0
    assert batch_sizes == []


def test_event_rejects_unknown_types():
    with pytest.raises(ValueError):
        NotificationEvent(type="CARRIER_PIGEON", title="coo")


def test_bulk_send_accepts_a_generator(db_session, make_users):
    user_ids = make_users(3)

    result = notify_bulk(
        db_session,
        (user_id for user_id in user_ids),
        NotificationEvent(type="SYSTEM", title="t"),
    )

    assert result.count == 3
    assert _stored(db_session) == 3


def test_new_session_bulk_send_skips_the_opted_out_members(db_session, make_users):
    user_ids = make_users(10)
    muted = set(user_ids[:3])
    for user_id in muted:
        _opt_out(db_session, user_id, new_session=False)

    result = notify_bulk(
        db_session, user_ids, NotificationEvent(type="NEW_SESSION", title="Session 4")
    )

    assert result.count == 7
    recipients = {model.user_id for model in db_session.query(NotificationModel).all()}
    assert recipients == set(user_ids) - muted
