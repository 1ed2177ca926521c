"""
Caching layer for the flight search aggregator.

This module contains the in-process TTL cache for search responses and the
key naming utilities used to derive cache keys from search parameters.
"""

from .utils import (
    CacheKeyPrefix,
    TTLPreset,
    CacheKeyBuilder,
)
from .memory import CacheEntry, CacheStats, InMemoryCache

__all__ = [
    # Cache
    "InMemoryCache",
    "CacheEntry",
    "CacheStats",

    # Utilities
    "CacheKeyPrefix",
    "TTLPreset",
    "CacheKeyBuilder",
]
