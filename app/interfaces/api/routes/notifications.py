"""Endpoints for the notification inbox, preferences and announcements."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    broadcast_announcement,
    count_unread_notifications,
    get_notification_preferences,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notifications_read,
    update_notification_preferences,
)
from app.domain.entities import User
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_current_active_user, require_admin
from app.interfaces.api.schemas import (
    AnnouncementCreate,
    FanOutRead,
    MarkReadResponse,
    NotificationMarkReadRequest,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(default=False),
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications_uc(
        db, current_user.id, unread_only=unread_only, limit=limit
    )
    return [NotificationRead.model_validate(item) for item in notifications]


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountRead:
    return UnreadCountRead(count=count_unread_notifications(db, current_user.id))


@router.post("/read", response_model=MarkReadResponse)
def mark_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkReadResponse:
    updated = mark_notifications_read(db, payload.ids, user_id=current_user.id)
    return MarkReadResponse(updated=updated)


@router.post("/read-all", response_model=MarkReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MarkReadResponse:
    return MarkReadResponse(updated=mark_all_notifications_read(db, user_id=current_user.id))


@router.get("/preferences", response_model=NotificationPreferenceRead)
def read_preferences(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferenceRead:
    preference = get_notification_preferences(db, current_user.id)
    return NotificationPreferenceRead.model_validate(preference)


@router.put("/preferences", response_model=NotificationPreferenceRead)
def write_preferences(
    payload: NotificationPreferenceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationPreferenceRead:
    """Update the caller's settings, clamping hour values into range."""

    preference = update_notification_preferences(
        db, current_user.id, **payload.model_dump(exclude_unset=True)
    )
    return NotificationPreferenceRead.model_validate(preference)


@router.post(
    "/announcements",
    response_model=FanOutRead,
    status_code=status.HTTP_201_CREATED,
)
def create_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
) -> FanOutRead:
    try:
        result = broadcast_announcement(
            db, title=payload.title, content=payload.content, link=payload.link
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return FanOutRead(count=result.count)
