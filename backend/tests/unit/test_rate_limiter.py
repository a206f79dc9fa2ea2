"""Unit tests for the windowed RateLimiter."""

import asyncio

import pytest

from portfolio_cms.application.services import RateLimiter
from portfolio_cms.domain.exceptions import RateLimitExceededError


def test_allows_up_to_limit_then_rejects(rate_limiter: RateLimiter):
    results = [rate_limiter.hit("create:projects", 5, 60) for _ in range(6)]
    assert results == [True] * 5 + [False]


def test_keys_are_counted_independently(rate_limiter: RateLimiter):
    for _ in range(5):
        rate_limiter.hit("create:projects", 5, 60)
    assert rate_limiter.hit("create:skills", 5, 60) is True
    assert rate_limiter.attempts("create:projects") == 5
    assert rate_limiter.attempts("create:skills") == 1


def test_window_resets_after_expiry(rate_limiter: RateLimiter, clock):
    for _ in range(6):
        rate_limiter.hit("delete:skills", 5, 60)
    clock.advance(61)
    assert rate_limiter.hit("delete:skills", 5, 60) is True
    assert rate_limiter.attempts("delete:skills") == 1


def test_window_not_reset_before_expiry(rate_limiter: RateLimiter, clock):
    for _ in range(5):
        rate_limiter.hit("delete:skills", 5, 60)
    clock.advance(59)
    assert rate_limiter.hit("delete:skills", 5, 60) is False


def test_check_raises_with_key(rate_limiter: RateLimiter):
    rate_limiter.check("update:projects:1", 1, 60)
    with pytest.raises(RateLimitExceededError) as exc_info:
        rate_limiter.check("update:projects:1", 1, 60)
    assert exc_info.value.key == "update:projects:1"
    assert exc_info.value.limit == 1


def test_clear_resets_one_key(rate_limiter: RateLimiter):
    rate_limiter.hit("a", 1, 60)
    rate_limiter.hit("b", 1, 60)
    rate_limiter.clear("a")
    assert rate_limiter.attempts("a") == 0
    assert rate_limiter.attempts("b") == 1


@pytest.mark.asyncio
async def test_sweeper_clears_all_counters():
    limiter = RateLimiter()
    limiter.hit("fetch:skills", 30, 60)
    await limiter.start_sweeper(0.01)
    try:
        await asyncio.sleep(0.05)
        assert limiter.attempts("fetch:skills") == 0
    finally:
        await limiter.stop_sweeper()
