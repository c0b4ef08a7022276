"""Use case for creating users."""

from sqlalchemy.orm import Session

from app.domain.entities import ROLE_ADMIN, ROLE_MEMBER, User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash
from app.utils import now_in_app_timezone

_ALLOWED_ROLES = {ROLE_ADMIN, ROLE_MEMBER}


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str = ROLE_MEMBER,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)

    if not password:
        raise ValueError("A password is required")

    if repository.get_by_email(email):
        raise ValueError("Email address is already registered")

    role_alias = role.lower()
    if role_alias not in _ALLOWED_ROLES:
        raise ValueError("Role not allowed")

    user = User(
        id=None,
        name=name,
        email=email,
        password=get_password_hash(password),
        role=role_alias,
        is_active=True,
        created_at=now_in_app_timezone(),
    )

    return repository.create(user)
