"""SQLAlchemy model for session attendance records."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from app.infrastructure.database import Base, generate_uuid


class AttendanceModel(Base):
    """Attendance of one participant for one session."""

    __tablename__ = "attendance"
    __table_args__ = (
        UniqueConstraint("session_id", "participant_id", name="uq_attendance_participant"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    session_id = Column(
        String(36),
        ForeignKey("program_session.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    participant_id = Column(
        String(36),
        ForeignKey("program_participant.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status = Column(String(20), nullable=False)
    checked_at = Column(DateTime, nullable=True)
    check_method = Column(String(20), nullable=False, default="MANUAL")
    late_minutes = Column(Integer, nullable=True)


__all__ = ["AttendanceModel"]
