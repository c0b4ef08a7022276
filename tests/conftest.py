"""Shared fixtures. Environment variables are set before ``app`` is imported."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "community_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["ATTENDANCE_TOKEN_SECRET"] = "test-attendance-secret-0123"
os.environ["APP_TIMEZONE"] = "Asia/Seoul"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    generate_uuid,
    initialize_database,
)
from app.infrastructure.models import (  # noqa: E402
    ProgramModel,
    ProgramParticipantModel,
    ProgramSessionModel,
    UserModel,
)
from app.utils import ensure_app_naive_datetime  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts from an empty schema."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session():
    with SessionLocal() as session:
        yield session


@pytest.fixture()
def make_users(db_session):
    """Insert ``count`` active members and return their ids."""

    def _make(count: int, *, role: str = "member") -> list[str]:
        ids = [generate_uuid() for _ in range(count)]
        db_session.add_all(
            UserModel(
                id=user_id,
                name=f"Member {index}",
                email=f"member-{user_id}@example.com",
                password="not-a-real-hash",
                role=role,
                is_active=True,
            )
            for index, user_id in enumerate(ids)
        )
        db_session.commit()
        return ids

    return _make


@pytest.fixture()
def make_program(db_session):
    """Create a program whose participants have the given statuses."""

    def _make(participants: dict[str, str] | None = None, *, title: str = "Book Club") -> str:
        program = ProgramModel(id=generate_uuid(), title=title)
        db_session.add(program)
        for user_id, status in (participants or {}).items():
            db_session.add(
                ProgramParticipantModel(program_id=program.id, user_id=user_id, status=status)
            )
        db_session.commit()
        return program.id

    return _make


@pytest.fixture()
def make_session(db_session):
    """Insert a program session without triggering notifications."""

    def _make(program_id: str, *, starts_at, ends_at=None, session_no: int = 1) -> str:
        model = ProgramSessionModel(
            id=generate_uuid(),
            program_id=program_id,
            session_no=session_no,
            title=f"Session {session_no}",
            starts_at=ensure_app_naive_datetime(starts_at),
            ends_at=ensure_app_naive_datetime(ends_at),
        )
        db_session.add(model)
        db_session.commit()
        return model.id

    return _make
