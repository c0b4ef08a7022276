"""Domain entity representing a platform member."""

from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_MEMBER = "member"


@dataclass
class User:
    """Core attributes describing a platform member or administrator."""

    id: str | None
    name: str
    email: str
    password: str
    role: str
    is_active: bool
    created_at: datetime | None = None
    last_login: datetime | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role matches ``alias``."""

        return self.role.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)
