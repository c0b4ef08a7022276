"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, String

from app.infrastructure.database import Base, generate_uuid
from app.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a platform member."""

    __tablename__ = "user"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(80), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="member")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    last_login = Column(DateTime, nullable=True)


__all__ = ["UserModel"]
