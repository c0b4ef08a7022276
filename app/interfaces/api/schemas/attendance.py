"""Schemas for QR attendance endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import AttendanceStatus


class AttendanceTokenRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    token: str
    session_id: str
    expires_at: datetime


class AttendanceTokenStatusRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    valid: bool
    remaining_seconds: int
    countdown: str
    should_refresh: bool
    error: str | None = None


class CheckInRequest(BaseModel):
    token: str = Field(..., min_length=1)


class CheckInRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    session_id: str
    status: AttendanceStatus
    message: str
    already_checked_in: bool
    late_minutes: int | None = None


class AttendanceSummaryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    present: int
    late: int
    absent: int
    excused: int
    total: int
    attendance_rate: int


__all__ = [
    "AttendanceSummaryRead",
    "AttendanceTokenRead",
    "AttendanceTokenStatusRead",
    "CheckInRead",
    "CheckInRequest",
]
