from datetime import datetime

from sqlalchemy.orm import Session

from app.infrastructure.repositories import UserRepository
from app.utils import now_in_app_timezone


def record_login(session: Session, user_id: str, *, when: datetime | None = None) -> None:
    """Stamp ``last_login`` for ``user_id``."""

    UserRepository(session).record_login(user_id, when=when or now_in_app_timezone())
