"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Iterable, Mapping

from sqlalchemy import func, insert
from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationType
from app.infrastructure.database import generate_uuid
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: str,
        *,
        unread_only: bool = False,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.user_id == user_id)
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: str) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .scalar()
            or 0
        )

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def create_many(self, notifications: Sequence[Notification]) -> int:
        """Insert ``notifications`` with a single statement and commit.

        Callers are responsible for bounding the size of ``notifications``.
        """

        if not notifications:
            return 0
        created_at = ensure_app_naive_datetime(now_in_app_timezone())
        rows = [self._to_row(item, created_at=created_at) for item in notifications]
        self.session.execute(insert(NotificationModel), rows)
        self.session.commit()
        return len(rows)

    def mark_as_read(self, notification_ids: Iterable[str], *, user_id: str) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update(self._read_values(), synchronize_session=False)
        )
        self.session.commit()
        return updated

    def mark_all_as_read(self, *, user_id: str) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update(self._read_values(), synchronize_session=False)
        )
        self.session.commit()
        return updated

    @staticmethod
    def _read_values() -> dict[Any, Any]:
        return {
            NotificationModel.is_read: True,
            NotificationModel.read_at: ensure_app_naive_datetime(now_in_app_timezone()),
        }

    @staticmethod
    def _to_row(notification: Notification, *, created_at) -> Mapping[str, Any]:
        return {
            "id": notification.id or generate_uuid(),
            "user_id": notification.user_id,
            "type": NotificationType(notification.type).value,
            "title": notification.title,
            "content": notification.content,
            "link": notification.link,
            "program_id": notification.program_id,
            "session_id": notification.session_id,
            "is_read": False,
            "read_at": None,
            "created_at": ensure_app_naive_datetime(notification.created_at) or created_at,
        }

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = ensure_app_naive_datetime(
            notification.created_at
        ) or ensure_app_naive_datetime(now_in_app_timezone())
        model.user_id = notification.user_id
        model.type = NotificationType(notification.type).value
        model.title = notification.title
        model.content = notification.content
        model.link = notification.link
        model.program_id = notification.program_id
        model.session_id = notification.session_id
        model.is_read = notification.is_read
        model.read_at = ensure_app_naive_datetime(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title,
            content=model.content,
            link=model.link,
            program_id=model.program_id,
            session_id=model.session_id,
            is_read=bool(model.is_read),
            read_at=ensure_app_timezone(model.read_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
