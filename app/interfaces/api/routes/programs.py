"""Endpoints for programs, enrolment and session scheduling."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.programs import (
    add_participant,
    create_program as create_program_uc,
    create_program_session,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import require_admin
from app.interfaces.api.schemas import (
    ParticipantCreate,
    ParticipantRead,
    ProgramCreate,
    ProgramRead,
    ProgramSessionCreate,
    ProgramSessionRead,
    ScheduledSessionRead,
)

router = APIRouter(prefix="/programs", tags=["programs"])


@router.post("/", response_model=ProgramRead, status_code=status.HTTP_201_CREATED)
def create_program(
    payload: ProgramCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> ProgramRead:
    try:
        program = create_program_uc(db, title=payload.title)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ProgramRead.model_validate(program)


@router.post(
    "/{program_id}/participants",
    response_model=ParticipantRead,
    status_code=status.HTTP_201_CREATED,
)
def enroll_participant(
    program_id: str,
    payload: ParticipantCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> ParticipantRead:
    try:
        participant = add_participant(
            db, program_id=program_id, user_id=payload.user_id, status=payload.status
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ParticipantRead.model_validate(participant)


@router.post(
    "/{program_id}/sessions",
    response_model=ScheduledSessionRead,
    status_code=status.HTTP_201_CREATED,
)
def schedule_session(
    program_id: str,
    payload: ProgramSessionCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> ScheduledSessionRead:
    """Create a session and notify the approved participants of the program."""

    try:
        scheduled = create_program_session(
            db,
            program_id=program_id,
            session_no=payload.session_no,
            title=payload.title,
            starts_at=payload.starts_at,
            ends_at=payload.ends_at,
        )
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ScheduledSessionRead(
        session=ProgramSessionRead.model_validate(scheduled.session),
        notified=scheduled.notified,
    )
