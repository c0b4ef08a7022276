"""Schemas for programs, participants and sessions."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProgramCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)


class ProgramRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    created_at: datetime | None = None


class ParticipantCreate(BaseModel):
    user_id: str
    status: str = "APPROVED"


class ParticipantRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    program_id: str
    user_id: str
    status: str


class ProgramSessionCreate(BaseModel):
    session_no: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=200)
    starts_at: datetime
    ends_at: datetime | None = None


class ProgramSessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    program_id: str
    session_no: int
    title: str
    starts_at: datetime
    ends_at: datetime | None = None


class ScheduledSessionRead(BaseModel):
    session: ProgramSessionRead
    notified: int


__all__ = [
    "ParticipantCreate",
    "ParticipantRead",
    "ProgramCreate",
    "ProgramRead",
    "ProgramSessionCreate",
    "ProgramSessionRead",
    "ScheduledSessionRead",
]
