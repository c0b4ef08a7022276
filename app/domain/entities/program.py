"""Domain entities for programs, their sessions and participants."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

PARTICIPANT_STATUS_PENDING = "PENDING"
PARTICIPANT_STATUS_APPROVED = "APPROVED"
PARTICIPANT_STATUS_REJECTED = "REJECTED"

PARTICIPANT_STATUSES = frozenset(
    {
        PARTICIPANT_STATUS_PENDING,
        PARTICIPANT_STATUS_APPROVED,
        PARTICIPANT_STATUS_REJECTED,
    }
)


@dataclass
class Program:
    """A book club, seminar or any other recurring activity."""

    id: str | None
    title: str
    created_at: datetime | None = None


@dataclass
class ProgramSession:
    """A single meeting of a program that members can attend."""

    id: str | None
    program_id: str
    session_no: int
    title: str
    starts_at: datetime
    ends_at: datetime | None = None
    reminder_sent_at: datetime | None = None
    created_at: datetime | None = None


@dataclass
class ProgramParticipant:
    """Membership of a user in a program."""

    id: str | None
    program_id: str
    user_id: str
    status: str = PARTICIPANT_STATUS_PENDING
    created_at: datetime | None = None

    @property
    def is_approved(self) -> bool:
        return self.status == PARTICIPANT_STATUS_APPROVED


__all__ = [
    "PARTICIPANT_STATUS_APPROVED",
    "PARTICIPANT_STATUS_PENDING",
    "PARTICIPANT_STATUS_REJECTED",
    "PARTICIPANT_STATUSES",
    "Program",
    "ProgramParticipant",
    "ProgramSession",
]
