"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import NotificationType


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[str] = Field(..., min_length=1, description="Notification identifiers")


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: NotificationType
    title: str
    content: str | None = None
    link: str | None = None
    program_id: str | None = None
    session_id: str | None = None
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime | None = None


class UnreadCountRead(BaseModel):
    count: int


class MarkReadResponse(BaseModel):
    updated: int


class NotificationPreferenceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    session_reminder: bool
    new_session: bool
    report_comment: bool
    announcement: bool
    reminder_hours_before: int
    quiet_hours_start: int
    quiet_hours_end: int


class NotificationPreferenceUpdate(BaseModel):
    """Partial update; out of range hours are clamped rather than rejected."""

    model_config = ConfigDict(extra="forbid")

    session_reminder: bool | None = None
    new_session: bool | None = None
    report_comment: bool | None = None
    announcement: bool | None = None
    reminder_hours_before: int | None = None
    quiet_hours_start: int | None = None
    quiet_hours_end: int | None = None


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str | None = None
    link: str | None = Field(default=None, max_length=500)


class FanOutRead(BaseModel):
    count: int


__all__ = [
    "AnnouncementCreate",
    "FanOutRead",
    "MarkReadResponse",
    "NotificationMarkReadRequest",
    "NotificationPreferenceRead",
    "NotificationPreferenceUpdate",
    "NotificationRead",
    "UnreadCountRead",
]
