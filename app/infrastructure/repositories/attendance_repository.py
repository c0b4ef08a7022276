"""Persistence helpers for attendance records."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Attendance, AttendanceStatus
from app.infrastructure.models import AttendanceModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class AttendanceRepository:
    """Provide CRUD operations for :class:`Attendance` records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_participant(
        self, *, session_id: str, participant_id: str
    ) -> Attendance | None:
        model = (
            self.session.query(AttendanceModel)
            .filter(AttendanceModel.session_id == session_id)
            .filter(AttendanceModel.participant_id == participant_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_session(self, session_id: str) -> Sequence[Attendance]:
        query = (
            self.session.query(AttendanceModel)
            .filter(AttendanceModel.session_id == session_id)
            .order_by(AttendanceModel.checked_at, AttendanceModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, attendance: Attendance) -> Attendance:
        model = AttendanceModel(
            session_id=attendance.session_id,
            participant_id=attendance.participant_id,
        )
        self._apply_entity_to_model(model, attendance)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, attendance: Attendance) -> Attendance:
        if attendance.id is None:
            raise ValueError("Attendance id is required for updates")
        model = self.session.get(AttendanceModel, attendance.id)
        if model is None:
            msg = f"Attendance with id {attendance.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, attendance)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: AttendanceModel, attendance: Attendance) -> None:
        model.status = AttendanceStatus(attendance.status).value
        model.checked_at = ensure_app_naive_datetime(attendance.checked_at)
        model.check_method = attendance.check_method
        model.late_minutes = attendance.late_minutes

    @staticmethod
    def _to_entity(model: AttendanceModel) -> Attendance:
        return Attendance(
            id=model.id,
            session_id=model.session_id,
            participant_id=model.participant_id,
            status=AttendanceStatus(model.status),
            checked_at=ensure_app_timezone(model.checked_at),
            check_method=model.check_method,
            late_minutes=model.late_minutes,
        )


__all__ = ["AttendanceRepository"]
