"""
Business logic services for the flight search aggregator.

This module contains the resilience primitives (rate limiting, retry,
request coalescing), the provider normalizers and the aggregator that
orchestrates them.
"""

from .events import SearchEvent, SearchEventLog, SearchEventType
from .rate_limiter import RateLimiter, TokenBucket
from .retry_handler import RetryHandler, RetryOptions, is_retryable
from .deduplicator import RequestDeduplicator
from .aggregator import FlightAggregator, create_flight_aggregator

__all__ = [
    'SearchEvent',
    'SearchEventLog',
    'SearchEventType',
    'RateLimiter',
    'TokenBucket',
    'RetryHandler',
    'RetryOptions',
    'is_retryable',
    'RequestDeduplicator',
    'FlightAggregator',
    'create_flight_aggregator'
]
