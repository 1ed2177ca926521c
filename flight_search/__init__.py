"""
Flight search aggregation engine.

Queries several heterogeneous flight providers concurrently and returns a
merged, deduplicated, price-sorted result set. The engine demonstrates the
patterns a multi-provider search needs in practice:
1. TTL caching of completed searches
2. Request coalescing for identical in-flight searches
3. Token bucket rate limiting and retry with exponential backoff
4. Partial-failure fan-out and cross-provider normalization
"""

__version__ = "0.1.0"
