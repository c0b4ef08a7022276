"""Use cases for programs and their sessions."""

from .errors import ProgramNotFoundError, SessionNotFoundError
from .manage_programs import (
    ScheduledSession,
    add_participant,
    create_program,
    create_program_session,
)

__all__ = [
    "ProgramNotFoundError",
    "ScheduledSession",
    "SessionNotFoundError",
    "add_participant",
    "create_program",
    "create_program_session",
]
