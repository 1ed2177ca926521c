"""
Cache utilities for key naming conventions and TTL presets.

This module provides consistent cache key generation. Keys built from
parameter mappings are serialized with sorted keys so that semantically
identical requests always collide, whatever order their fields arrive in.
"""

import json
from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel


class CacheKeyPrefix(str, Enum):
    """Standard cache key prefixes for different data types."""

    FLIGHT_SEARCH = "flight:search"


class TTLPreset(int, Enum):
    """Standard TTL presets in seconds for different data types."""

    SEARCH_RESULTS = 300    # 5 minutes


class CacheKeyBuilder:
    """
    Builder class for generating consistent cache keys.

    Provides methods for creating standardized cache keys with proper
    namespacing and order-independent parameter encoding.
    """

    @staticmethod
    def build_key(prefix: Union[CacheKeyPrefix, str], *parts: Any) -> str:
        """
        Build a cache key from a prefix and positional parts.

        Example:
            build_key(CacheKeyPrefix.FLIGHT_SEARCH, "JFK", "LAX")
            # Returns: "flight:search:JFK:LAX"
        """
        prefix_str = prefix.value if isinstance(prefix, CacheKeyPrefix) else str(prefix)
        key_parts = [prefix_str]
        key_parts.extend(str(part) for part in parts if part is not None)
        return ":".join(key_parts)

    @staticmethod
    def build_sorted_key(prefix: Union[CacheKeyPrefix, str], data: Mapping[str, Any]) -> str:
        """
        Build a cache key by serializing a mapping with its keys sorted.

        ``None`` values are dropped so an omitted optional field and an
        explicit ``None`` produce the same key.

        Args:
            prefix: Key prefix
            data: Parameters to encode

        Returns:
            str: Cache key

        Example:
            build_sorted_key(CacheKeyPrefix.FLIGHT_SEARCH, {"to": "JFK", "from": "LAX"})
            # Returns: 'flight:search:{"from":"LAX","to":"JFK"}'
        """
        filtered = {key: value for key, value in data.items() if value is not None}
        data_str = json.dumps(filtered, sort_keys=True, separators=(",", ":"), default=str)
        return CacheKeyBuilder.build_key(prefix, data_str)

    @staticmethod
    def build_search_key(params: Union[BaseModel, Mapping[str, Any]]) -> str:
        """
        Build the cache key of a flight search.

        Args:
            params: Search parameters model or plain mapping

        Returns:
            str: Cache key shared by all semantically identical searches
        """
        if isinstance(params, BaseModel):
            data = params.model_dump(mode="json")
        else:
            data = dict(params)
        return CacheKeyBuilder.build_sorted_key(CacheKeyPrefix.FLIGHT_SEARCH, data)
