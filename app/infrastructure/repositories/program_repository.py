"""Persistence helpers for programs, sessions and participants."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import (
    PARTICIPANT_STATUS_APPROVED,
    Program,
    ProgramParticipant,
    ProgramSession,
)
from app.infrastructure.models import (
    ProgramModel,
    ProgramParticipantModel,
    ProgramSessionModel,
)
from app.utils import ensure_app_naive_datetime, ensure_app_timezone


class ProgramRepository:
    """Provide CRUD operations for the program aggregate."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, program_id: str) -> Program | None:
        model = self.session.get(ProgramModel, program_id)
        return self._program_to_entity(model) if model else None

    def create(self, program: Program) -> Program:
        model = ProgramModel(title=program.title)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._program_to_entity(model)

    def get_session(self, session_id: str) -> ProgramSession | None:
        model = self.session.get(ProgramSessionModel, session_id)
        return self._session_to_entity(model) if model else None

    def create_session(self, program_session: ProgramSession) -> ProgramSession:
        model = ProgramSessionModel(
            program_id=program_session.program_id,
            session_no=program_session.session_no,
            title=program_session.title,
            starts_at=ensure_app_naive_datetime(program_session.starts_at),
            ends_at=ensure_app_naive_datetime(program_session.ends_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._session_to_entity(model)

    def list_sessions_pending_reminder(
        self, *, start: datetime, end: datetime
    ) -> Sequence[ProgramSession]:
        """Return sessions starting in ``(start, end]`` not reminded yet."""

        query = (
            self.session.query(ProgramSessionModel)
            .filter(ProgramSessionModel.starts_at > ensure_app_naive_datetime(start))
            .filter(ProgramSessionModel.starts_at <= ensure_app_naive_datetime(end))
            .filter(ProgramSessionModel.reminder_sent_at.is_(None))
            .order_by(ProgramSessionModel.starts_at, ProgramSessionModel.id)
        )
        return [self._session_to_entity(model) for model in query.all()]

    def mark_reminder_sent(self, session_id: str, *, when: datetime) -> None:
        model = self.session.get(ProgramSessionModel, session_id)
        if model is None:
            msg = f"Session with id {session_id} not found"
            raise ValueError(msg)
        model.reminder_sent_at = ensure_app_naive_datetime(when)
        self.session.add(model)
        self.session.commit()

    def add_participant(self, participant: ProgramParticipant) -> ProgramParticipant:
        model = ProgramParticipantModel(
            program_id=participant.program_id,
            user_id=participant.user_id,
            status=participant.status,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._participant_to_entity(model)

    def get_participant(
        self, *, program_id: str, user_id: str
    ) -> ProgramParticipant | None:
        model = (
            self.session.query(ProgramParticipantModel)
            .filter(ProgramParticipantModel.program_id == program_id)
            .filter(ProgramParticipantModel.user_id == user_id)
            .first()
        )
        return self._participant_to_entity(model) if model else None

    def list_approved_participant_user_ids(self, program_id: str) -> list[str]:
        query = (
            self.session.query(ProgramParticipantModel.user_id)
            .filter(ProgramParticipantModel.program_id == program_id)
            .filter(ProgramParticipantModel.status == PARTICIPANT_STATUS_APPROVED)
            .order_by(ProgramParticipantModel.created_at, ProgramParticipantModel.id)
        )
        return [user_id for (user_id,) in query.all()]

    @staticmethod
    def _program_to_entity(model: ProgramModel) -> Program:
        return Program(
            id=model.id,
            title=model.title,
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _session_to_entity(model: ProgramSessionModel) -> ProgramSession:
        return ProgramSession(
            id=model.id,
            program_id=model.program_id,
            session_no=model.session_no,
            title=model.title,
            starts_at=ensure_app_timezone(model.starts_at),
            ends_at=ensure_app_timezone(model.ends_at),
            reminder_sent_at=ensure_app_timezone(model.reminder_sent_at),
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _participant_to_entity(model: ProgramParticipantModel) -> ProgramParticipant:
        return ProgramParticipant(
            id=model.id,
            program_id=model.program_id,
            user_id=model.user_id,
            status=model.status,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ProgramRepository"]
