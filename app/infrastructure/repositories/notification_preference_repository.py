"""Persistence helpers for notification preferences."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreference
from app.infrastructure.models import NotificationPreferenceModel
from app.utils import ensure_app_timezone


class NotificationPreferenceRepository:
    """Read and store :class:`NotificationPreference` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_user(self, user_id: str) -> NotificationPreference | None:
        model = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def get_map_by_user_ids(
        self, user_ids: Sequence[str]
    ) -> dict[str, NotificationPreference]:
        if not user_ids:
            return {}
        query = self.session.query(NotificationPreferenceModel).filter(
            NotificationPreferenceModel.user_id.in_(set(user_ids))
        )
        return {model.user_id: self._to_entity(model) for model in query.all()}

    def save(self, preference: NotificationPreference) -> NotificationPreference:
        model = (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == preference.user_id)
            .first()
        )
        if model is None:
            model = NotificationPreferenceModel(user_id=preference.user_id)
        model.session_reminder = preference.session_reminder
        model.new_session = preference.new_session
        model.report_comment = preference.report_comment
        model.announcement = preference.announcement
        model.reminder_hours_before = preference.reminder_hours_before
        model.quiet_hours_start = preference.quiet_hours_start
        model.quiet_hours_end = preference.quiet_hours_end
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: NotificationPreferenceModel) -> NotificationPreference:
        return NotificationPreference(
            id=model.id,
            user_id=model.user_id,
            session_reminder=model.session_reminder,
            new_session=model.new_session,
            report_comment=model.report_comment,
            announcement=model.announcement,
            reminder_hours_before=model.reminder_hours_before,
            quiet_hours_start=model.quiet_hours_start,
            quiet_hours_end=model.quiet_hours_end,
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationPreferenceRepository"]
