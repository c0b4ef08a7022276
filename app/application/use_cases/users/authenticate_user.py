"""Check member credentials for the login endpoint."""

import logging
from enum import Enum

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import verify_password

logger = logging.getLogger(__name__)


class AuthenticationStatus(str, Enum):
    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    INACTIVE = "inactive"


def authenticate_user(
    session: Session, email: str, password: str
) -> tuple[User | None, AuthenticationStatus]:
    """Return ``(user, status)``; ``user`` is ``None`` when credentials are wrong.

    Unknown emails and wrong passwords share one status so the response does
    not reveal which emails are registered.
    """

    user = UserRepository(session).get_by_email(email.strip())
    if user is None or not verify_password(password, user.password):
        return None, AuthenticationStatus.INVALID_CREDENTIALS
    if not user.is_active:
        logger.info("Inactive user %s attempted to log in", user.id)
        return user, AuthenticationStatus.INACTIVE
    return user, AuthenticationStatus.SUCCESS
