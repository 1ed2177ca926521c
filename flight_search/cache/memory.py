"""
In-process TTL cache with hit/miss accounting.

This module provides the cache that stores completed search responses.
Entries expire lazily on access, and a periodic sweep triggered every Nth
insertion evicts expired entries that nobody reads again.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from .utils import TTLPreset

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    """Cached payload and its absolute expiry instant."""

    value: T
    expires_at: float


@dataclass
class CacheStats:
    """Cache statistics snapshot."""

    size: int = 0
    hits: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit ratio."""
        total_reads = self.hits + self.misses
        return self.hits / total_reads if total_reads > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "size": self.size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hit_rate,
        }


class InMemoryCache(Generic[T]):
    """
    TTL key/value store owned by a single process.

    Features:
    - Absolute expiry per entry with a configurable default TTL
    - Lazy eviction of expired entries on access
    - Best-effort sweep every ``sweep_interval`` insertions
    - Hit, miss and size statistics

    The cache is not thread-safe. It relies on the single-threaded asyncio
    model where no two tasks touch it at the same instant.
    """

    def __init__(
        self,
        default_ttl: float = float(TTLPreset.SEARCH_RESULTS),
        sweep_interval: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            default_ttl: TTL in seconds used when ``set`` gets no explicit TTL
            sweep_interval: Number of insertions between expiry sweeps
            clock: Monotonic time source in seconds
        """
        if default_ttl < 0:
            raise ValueError("default_ttl must not be negative")
        if sweep_interval < 1:
            raise ValueError("sweep_interval must be at least 1")

        self.default_ttl = default_ttl
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._insertions = 0
        self.hits = 0
        self.misses = 0

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """
        Store a value with an absolute expiry.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds, ``None`` for the default TTL
        """
        effective_ttl = ttl if ttl is not None else self.default_ttl
        self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + effective_ttl)

        self._insertions += 1
        if self._insertions % self.sweep_interval == 0:
            self.cleanup()

    def get(self, key: str) -> Optional[T]:
        """
        Return the cached value if present and not expired.

        An expired entry is evicted and counted as a miss.
        """
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        if self._clock() > entry.expires_at:
            del self._entries[key]
            self.misses += 1
            return None

        self.hits += 1
        return entry.value

    def has(self, key: str) -> bool:
        """Check whether a live entry exists. Counts as an access."""
        return self.get(key) is not None

    def delete(self, key: str) -> bool:
        """Delete a key, returning whether it was present."""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        self._entries.clear()
        self._insertions = 0
        self.hits = 0
        self.misses = 0

    def cleanup(self) -> int:
        """
        Evict all expired entries.

        Returns:
            Number of entries evicted
        """
        now = self._clock()
        expired_keys = [key for key, entry in self._entries.items() if now > entry.expires_at]
        for key in expired_keys:
            del self._entries[key]

        if expired_keys:
            logger.debug("Cache sweep evicted %d expired entries", len(expired_keys))
        return len(expired_keys)

    def get_stats(self) -> CacheStats:
        """Return a snapshot of size, hits and misses."""
        return CacheStats(size=len(self._entries), hits=self.hits, misses=self.misses)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() <= entry.expires_at
