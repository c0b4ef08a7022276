"""Endpoints for QR token issuance and scan-to-attend check-in."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.attendance import (
    CheckInError,
    check_in_with_token,
    get_attendance_token_status,
    get_session_attendance_summary,
    issue_attendance_token,
)
from app.domain.entities import User
from app.infrastructure.attendance_tokens import AttendanceTokenService
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    enforce_rate_limit,
    get_current_active_user,
    get_token_service,
    require_admin,
)
from app.interfaces.api.schemas import (
    AttendanceSummaryRead,
    AttendanceTokenRead,
    AttendanceTokenStatusRead,
    CheckInRead,
    CheckInRequest,
)

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post(
    "/sessions/{session_id}/token",
    response_model=AttendanceTokenRead,
    status_code=status.HTTP_201_CREATED,
)
def create_attendance_token(
    session_id: str,
    db: Session = Depends(get_db),
    token_service: AttendanceTokenService = Depends(get_token_service),
    _: User = Depends(require_admin),
) -> AttendanceTokenRead:
    """Issue a fresh QR token for the session."""

    try:
        issued = issue_attendance_token(db, token_service, session_id=session_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return AttendanceTokenRead.model_validate(issued)


@router.get("/tokens/status", response_model=AttendanceTokenStatusRead)
def read_attendance_token_status(
    token: str = Query(..., min_length=1),
    token_service: AttendanceTokenService = Depends(get_token_service),
    _: User = Depends(get_current_active_user),
) -> AttendanceTokenStatusRead:
    return AttendanceTokenStatusRead.model_validate(
        get_attendance_token_status(token_service, token)
    )


@router.post(
    "/check-in",
    response_model=CheckInRead,
    dependencies=[Depends(enforce_rate_limit)],
)
def check_in(
    payload: CheckInRequest,
    db: Session = Depends(get_db),
    token_service: AttendanceTokenService = Depends(get_token_service),
    current_user: User = Depends(get_current_active_user),
) -> CheckInRead:
    """Record the caller's attendance for the session encoded in the token."""

    try:
        result = check_in_with_token(
            db, token_service, user_id=current_user.id, token=payload.token
        )
    except CheckInError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "reason": exc.reason},
        ) from exc
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return CheckInRead.model_validate(result)


@router.get("/sessions/{session_id}/summary", response_model=AttendanceSummaryRead)
def read_attendance_summary(
    session_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> AttendanceSummaryRead:
    try:
        stats = get_session_attendance_summary(db, session_id=session_id)
    except LookupError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return AttendanceSummaryRead.model_validate(stats)
