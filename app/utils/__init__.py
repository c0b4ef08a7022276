"""Utility helpers for reusable functionality."""

from .datetime import (
    datetime_from_millis,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    now_in_millis,
)

__all__ = [
    "datetime_from_millis",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "now_in_millis",
]
