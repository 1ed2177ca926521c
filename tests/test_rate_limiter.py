"""
Tests for the token bucket rate limiter.
"""

import asyncio
from unittest.mock import patch

import pytest

from flight_search.services import RateLimiter


class TestTokenAcquisition:
    """Test synchronous token consumption."""

    def test_bucket_starts_full(self, clock):
        """Test a new key can burst up to capacity."""
        limiter = RateLimiter(capacity=3, clock=clock)
        assert [limiter.acquire("k") for _ in range(4)] == [True, True, True, False]

    def test_keys_are_independent(self, clock):
        """Test each key owns its own bucket."""
        limiter = RateLimiter(capacity=1, clock=clock)
        assert limiter.acquire("a") is True
        assert limiter.acquire("a") is False
        assert limiter.acquire("b") is True

    def test_refill_over_time(self, clock):
        """Test tokens come back proportionally to elapsed time."""
        limiter = RateLimiter(capacity=2, refill_rate=1.0, refill_interval=1.0, clock=clock)
        limiter.acquire("k")
        limiter.acquire("k")
        assert limiter.acquire("k") is False

        clock.advance(1.0)
        assert limiter.acquire("k") is True
        assert limiter.acquire("k") is False

    def test_partial_refill_is_not_admitted(self, clock):
        """Test half a token does not admit a call."""
        limiter = RateLimiter(capacity=1, refill_rate=1.0, refill_interval=1.0, clock=clock)
        limiter.acquire("k")
        clock.advance(0.5)
        assert limiter.acquire("k") is False
        clock.advance(0.5)
        assert limiter.acquire("k") is True

    def test_refill_is_capped_at_capacity(self, clock):
        """Test a long idle period never exceeds capacity."""
        limiter = RateLimiter(capacity=3, clock=clock)
        limiter.acquire("k")
        clock.advance(3600)
        assert limiter.get_remaining_tokens("k") == 3

    def test_refill_not_double_counted(self, clock):
        """Test repeated reads do not re-add the same elapsed time."""
        limiter = RateLimiter(capacity=10, refill_rate=1.0, refill_interval=1.0, clock=clock)
        for _ in range(10):
            limiter.acquire("k")

        clock.advance(2.0)
        assert limiter.get_remaining_tokens("k") == 2
        assert limiter.get_remaining_tokens("k") == 2
        assert limiter.get_remaining_tokens("k") == 2

    def test_remaining_tokens_floors(self, clock):
        """Test remaining tokens report whole tokens only."""
        limiter = RateLimiter(capacity=5, refill_rate=1.0, refill_interval=2.0, clock=clock)
        for _ in range(5):
            limiter.acquire("k")
        clock.advance(3.0)
        assert limiter.get_remaining_tokens("k") == 1

    def test_reset(self, clock):
        """Test resetting a key restores a full bucket."""
        limiter = RateLimiter(capacity=2, clock=clock)
        limiter.acquire("a")
        limiter.acquire("a")
        limiter.acquire("b")

        limiter.reset("a")
        assert limiter.get_remaining_tokens("a") == 2
        assert limiter.get_remaining_tokens("b") == 1

        limiter.reset()
        assert limiter.get_remaining_tokens("b") == 2

    def test_invalid_configuration(self):
        """Test invalid limiter settings are rejected."""
        with pytest.raises(ValueError):
            RateLimiter(capacity=0)
        with pytest.raises(ValueError):
            RateLimiter(refill_rate=0)
        with pytest.raises(ValueError):
            RateLimiter(refill_interval=0)


class TestWaitForToken:
    """Test the suspending acquisition path."""

    @pytest.mark.asyncio
    async def test_returns_immediately_when_tokens_available(self, clock):
        """Test no sleep happens while tokens remain."""
        limiter = RateLimiter(capacity=2, clock=clock)
        with patch("flight_search.services.rate_limiter.asyncio.sleep") as mock_sleep:
            await limiter.wait_for_token("k")
            mock_sleep.assert_not_called()
        assert limiter.get_remaining_tokens("k") == 1

    @pytest.mark.asyncio
    async def test_polls_until_refilled(self, clock):
        """Test the waiter polls and is admitted once a token refills."""
        limiter = RateLimiter(capacity=1, refill_rate=1.0, refill_interval=1.0, poll_interval=0.25, clock=clock)
        limiter.acquire("k")

        sleeps = []

        async def fake_sleep(seconds):
            sleeps.append(seconds)
            clock.advance(seconds)

        with patch("flight_search.services.rate_limiter.asyncio.sleep", side_effect=fake_sleep):
            await limiter.wait_for_token("k")

        assert sleeps == [0.25, 0.25, 0.25, 0.25]
        assert limiter.get_remaining_tokens("k") == 0

    @pytest.mark.asyncio
    async def test_waiting_does_not_block_other_tasks(self):
        """Test other coroutines progress while one task waits for a token."""
        limiter = RateLimiter(capacity=1, refill_rate=1.0, refill_interval=0.05, poll_interval=0.01)
        limiter.acquire("k")
        progressed = []

        async def other_work():
            progressed.append(True)

        await asyncio.gather(limiter.wait_for_token("k"), other_work())
        assert progressed == [True]
