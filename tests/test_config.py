from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.config import Settings


def test_attendance_secret_is_required(monkeypatch):
    monkeypatch.delenv("ATTENDANCE_TOKEN_SECRET", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_short_attendance_secret_is_rejected(monkeypatch):
    monkeypatch.setenv("ATTENDANCE_TOKEN_SECRET", "too-short")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_defaults(monkeypatch):
    monkeypatch.delenv("NOTIFICATION_BATCH_SIZE", raising=False)

    settings = Settings(_env_file=None)

    assert settings.notification_batch_size == 100
    assert settings.rate_limit_requests == 30
    assert settings.rate_limit_window_seconds == 60
    assert settings.rate_limit_sweep_seconds == 300
    assert settings.session_reminder_window_hours == 24
