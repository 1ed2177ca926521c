"""
Token bucket rate limiter for outbound provider calls.

Each key owns a bucket that starts full and refills continuously in
proportion to the elapsed time. A call is admitted when a whole token is
available. Bursts are allowed up to the bucket capacity while the long-run
rate stays bounded by the refill rate.
"""

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class TokenBucket:
    """Token count and last refill instant of a single key."""
    tokens: float
    last_refill: float


class RateLimiter:
    """
    Per-key token bucket rate limiter.

    Buckets are created lazily with full capacity on first use. Refill is
    applied on every access:
    ``tokens = min(capacity, tokens + elapsed / refill_interval * refill_rate)``.

    The bucket map is plain instance state; the single-threaded asyncio
    model guarantees no two tasks mutate it at the same instant.
    """

    def __init__(
        self,
        capacity: int = 10,
        refill_rate: float = 1.0,
        refill_interval: float = 1.0,
        poll_interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the rate limiter.

        Args:
            capacity: Maximum tokens a bucket can hold
            refill_rate: Tokens added per refill interval
            refill_interval: Refill interval in seconds
            poll_interval: Seconds between admission attempts in ``wait_for_token``
            clock: Monotonic time source in seconds
        """
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if refill_rate <= 0 or refill_interval <= 0:
            raise ValueError("refill_rate and refill_interval must be positive")

        self.capacity = capacity
        self.refill_rate = refill_rate
        self.refill_interval = refill_interval
        self.poll_interval = poll_interval
        self._clock = clock
        self._buckets: Dict[str, TokenBucket] = {}

    def _get_or_create_bucket(self, key: str) -> TokenBucket:
        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = TokenBucket(tokens=float(self.capacity), last_refill=self._clock())
            self._buckets[key] = bucket
        return bucket

    def _refill(self, bucket: TokenBucket) -> None:
        now = self._clock()
        elapsed = max(0.0, now - bucket.last_refill)
        tokens_to_add = (elapsed / self.refill_interval) * self.refill_rate
        bucket.tokens = min(float(self.capacity), bucket.tokens + tokens_to_add)
        bucket.last_refill = now

    def acquire(self, key: str) -> bool:
        """
        Try to consume one token from the bucket of ``key``.

        Returns:
            True if a token was available and consumed, False otherwise
        """
        bucket = self._get_or_create_bucket(key)
        self._refill(bucket)

        if bucket.tokens >= 1:
            bucket.tokens -= 1
            return True
        return False

    async def wait_for_token(self, key: str) -> None:
        """
        Suspend the calling task until a token for ``key`` is consumed.

        Polls ``acquire`` every ``poll_interval`` seconds. Other tasks keep
        running while this one waits.
        """
        attempts = 0
        start_time = self._clock()
        while not self.acquire(key):
            attempts += 1
            await asyncio.sleep(self.poll_interval)

        if attempts:
            wait_time_ms = (self._clock() - start_time) * 1000
            logger.debug(f"Rate limit token acquired: {key} (polls: {attempts}, wait: {wait_time_ms:.1f}ms)")

    def get_remaining_tokens(self, key: str) -> int:
        """Return the number of whole tokens currently available for ``key``."""
        bucket = self._get_or_create_bucket(key)
        self._refill(bucket)
        return math.floor(bucket.tokens)

    def reset(self, key: Optional[str] = None) -> None:
        """Clear the bucket of ``key``, or every bucket when no key is given."""
        if key is not None:
            self._buckets.pop(key, None)
        else:
            self._buckets.clear()
