"""Tests for the in-memory fixed window rate limiter."""

from __future__ import annotations

import pytest

from app.infrastructure.rate_limiter import InMemoryRateLimiter


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


def test_requests_beyond_the_limit_are_rejected(clock):
    limiter = InMemoryRateLimiter(limit=2, window_seconds=10, clock=clock)

    first = limiter.check("client:/attendance/check-in")
    second = limiter.check("client:/attendance/check-in")
    third = limiter.check("client:/attendance/check-in")

    assert (first.allowed, first.remaining) == (True, 1)
    assert (second.allowed, second.remaining) == (True, 0)
    assert third.allowed is False
    assert third.retry_after == 10
    assert third.headers()["Retry-After"] == "10"
    assert third.headers()["X-RateLimit-Remaining"] == "0"


def test_keys_are_counted_independently(clock):
    limiter = InMemoryRateLimiter(limit=1, window_seconds=10, clock=clock)

    assert limiter.check("a").allowed is True
    assert limiter.check("b").allowed is True
    assert limiter.check("a").allowed is False


def test_window_resets_after_it_elapses(clock):
    limiter = InMemoryRateLimiter(limit=1, window_seconds=10, clock=clock)
    limiter.check("a")

    clock.now += 4
    denied = limiter.check("a")
    assert denied.allowed is False
    assert denied.retry_after == 6

    clock.now += 6
    assert limiter.check("a").allowed is True


def test_expired_entries_are_swept_periodically(clock):
    limiter = InMemoryRateLimiter(
        limit=5, window_seconds=10, sweep_interval_seconds=300, clock=clock
    )
    for key in ("a", "b", "c"):
        limiter.check(key)
    assert len(limiter) == 3

    clock.now += 100
    limiter.check("d")
    assert len(limiter) == 4

    clock.now += 201
    limiter.check("e")
    assert len(limiter) == 1


def test_clear_forgets_every_counter(clock):
    limiter = InMemoryRateLimiter(limit=1, window_seconds=10, clock=clock)
    limiter.check("a")

    limiter.clear()

    assert len(limiter) == 0
    assert limiter.check("a").allowed is True


@pytest.mark.parametrize("limit, window", [(0, 10), (1, 0)])
def test_invalid_configuration_is_rejected(limit, window):
    with pytest.raises(ValueError):
        InMemoryRateLimiter(limit=limit, window_seconds=window)
