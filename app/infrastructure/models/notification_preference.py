"""SQLAlchemy model for per-user notification settings."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String

from app.infrastructure.database import Base, generate_uuid
from app.utils import now_in_app_naive_datetime


class NotificationPreferenceModel(Base):
    """One row per user holding opt-in flags and reminder timing."""

    __tablename__ = "notification_preference"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(
        String(36),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    session_reminder = Column(Boolean, nullable=False, default=True)
    new_session = Column(Boolean, nullable=False, default=True)
    report_comment = Column(Boolean, nullable=False, default=True)
    announcement = Column(Boolean, nullable=False, default=True)
    reminder_hours_before = Column(Integer, nullable=False, default=24)
    quiet_hours_start = Column(Integer, nullable=False, default=22)
    quiet_hours_end = Column(Integer, nullable=False, default=8)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["NotificationPreferenceModel"]
