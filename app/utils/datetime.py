"""Clock helpers shared by tokens, check-in rules and persistence.

Domain code works with aware datetimes in the application timezone. The
database stores the same wall-clock time without ``tzinfo`` and attendance
tokens carry Unix epoch milliseconds.
"""

from __future__ import annotations

import re
import time
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

DEFAULT_TIMEZONE = "Asia/Seoul"

_UTC_OFFSET = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Timezone named by ``APP_TIMEZONE``, ``Asia/Seoul`` when unset or unknown."""

    name = (get_settings().app_timezone or "").strip()
    return _resolve_timezone(name or DEFAULT_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default for ``created_at`` style fields."""

    return now_in_app_timezone().replace(tzinfo=None)


def now_in_millis() -> int:
    return time.time_ns() // 1_000_000


def datetime_from_millis(value: int) -> datetime:
    return datetime.fromtimestamp(value / 1000, tz=get_app_timezone())


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach or convert to the app timezone. Naive input is read as local time."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Form stored by the repositories: local wall-clock time without ``tzinfo``."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized else None


def _resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        pass

    match = _UTC_OFFSET.match(name)
    if match is None:
        return ZoneInfo(DEFAULT_TIMEZONE)
    offset = timedelta(
        hours=int(match["hours"]), minutes=int(match["minutes"] or 0)
    )
    return timezone(-offset if match["sign"] == "-" else offset)
