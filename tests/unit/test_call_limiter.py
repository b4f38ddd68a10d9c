"""
Unit tests for the call-count limiter

Tests cover:
- Calls under limit allowed
- Limit enforcement
- Window reset after 15s
- Per-tag isolation
- Injected cache
- Thread-safe counting
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from cleo.infrastructure.cache import ExpiringCache
from cleo.infrastructure.call_limiter import CallLimiter, CallLimitExceeded


@pytest.fixture
def limiter(clock):
    return CallLimiter(max_calls=6, window_seconds=15, clock=clock)


def test_calls_under_limit_allowed(limiter):
    remaining = [limiter.check("user-1") for _ in range(6)]
    assert remaining == [5, 4, 3, 2, 1, 0]


def test_limit_enforced(limiter, clock):
    for _ in range(6):
        limiter.check("user-1")

    clock.advance(4)
    with pytest.raises(CallLimitExceeded) as exc_info:
        limiter.check("user-1")

    assert exc_info.value.tag == "user-1"
    assert exc_info.value.limit == 6
    assert exc_info.value.retry_after == pytest.approx(11)
    assert "Too many calls" in str(exc_info.value)


def test_window_resets_after_expiry(limiter, clock):
    for _ in range(6):
        limiter.check("user-1")

    clock.advance(15.5)
    assert limiter.check("user-1") == 5


def test_window_boundary_not_reset(limiter, clock):
    """Reset happens strictly after window_seconds"""
    for _ in range(6):
        limiter.check("user-1")

    clock.advance(15)
    with pytest.raises(CallLimitExceeded):
        limiter.check("user-1")


def test_tags_isolated(limiter):
    for _ in range(6):
        limiter.check("user-1")

    assert limiter.check("user-2") == 5


def test_remaining_does_not_count(limiter, clock):
    assert limiter.remaining("user-1") == 6
    limiter.check("user-1")
    limiter.check("user-1")

    assert limiter.remaining("user-1") == 4
    assert limiter.remaining("user-1") == 4

    clock.advance(16)
    assert limiter.remaining("user-1") == 6


def test_reset_clears_tag(limiter):
    for _ in range(6):
        limiter.check("user-1")

    limiter.reset("user-1")
    assert limiter.check("user-1") == 5


def test_injected_cache_holds_buckets(clock):
    cache = ExpiringCache(clock=clock)
    limiter = CallLimiter(max_calls=2, window_seconds=15, cache=cache, clock=clock)

    limiter.check("anon")
    assert "anon" in cache

    clock.advance(31)
    assert "anon" not in cache


@pytest.mark.parametrize(
    ("max_calls", "window_seconds"),
    [(0, 15), (-1, 15), (6, 0), (6, -5)],
)
def test_invalid_configuration(max_calls, window_seconds):
    with pytest.raises(ValueError):
        CallLimiter(max_calls=max_calls, window_seconds=window_seconds)


def test_concurrent_checks_count_every_call(clock):
    """The API checks from worker threads; no call may slip past the limit"""
    limiter = CallLimiter(max_calls=20, window_seconds=15, clock=clock)

    def attempt(_: int) -> bool:
        try:
            limiter.check("shared")
        except CallLimitExceeded:
            return False
        return True

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(attempt, range(50)))

    assert outcomes.count(True) == 20
    assert limiter.remaining("shared") == 0
