"""SQLAlchemy models for programs, sessions and participants."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base, generate_uuid
from app.utils import now_in_app_naive_datetime


class ProgramModel(Base):
    """Database representation of a program."""

    __tablename__ = "program"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(200), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    sessions = relationship(
        "ProgramSessionModel",
        back_populates="program",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ProgramSessionModel(Base):
    """A scheduled meeting of a program."""

    __tablename__ = "program_session"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    program_id = Column(
        String(36),
        ForeignKey("program.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    session_no = Column(Integer, nullable=False)
    title = Column(String(200), nullable=False)
    starts_at = Column(DateTime, nullable=False, index=True)
    ends_at = Column(DateTime, nullable=True)
    reminder_sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    program = relationship("ProgramModel", back_populates="sessions")


class ProgramParticipantModel(Base):
    """Membership of a user in a program."""

    __tablename__ = "program_participant"
    __table_args__ = (
        UniqueConstraint("program_id", "user_id", name="uq_program_participant"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    program_id = Column(
        String(36),
        ForeignKey("program.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        String(36),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = Column(String(20), nullable=False, default="PENDING")
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ProgramModel", "ProgramParticipantModel", "ProgramSessionModel"]
