"""
Flight aggregator service.

Orchestrates a flight search across all upstream providers:
1. Serve from the cache when a live response exists
2. Coalesce concurrent identical searches into one computation
3. Respect the shared outbound rate limit
4. Fan out to every provider in parallel, each call retried and normalized
5. Merge partial results, sort by price and drop cross-provider duplicates
6. Cache the response for subsequent identical searches

A failing provider branch never aborts its siblings; if every provider
fails the search still succeeds with an empty flight list.
"""

import asyncio
import logging
import time
import uuid
from typing import Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel

from ..cache import CacheKeyBuilder, CacheStats, InMemoryCache
from ..models import (
    CabinClass,
    FlightModel,
    ProviderName,
    ProviderStatsModel,
    ProvidersStatsModel,
    SearchParamsModel,
    SearchResponseModel,
)
from ..providers import FlightProvider, create_providers
from ..utils.config import AggregatorConfig
from .deduplicator import RequestDeduplicator
from .events import SearchEventLog, SearchEventType
from .normalizer import (
    normalize_aggregator_flights,
    normalize_gds_flights,
    normalize_ndc_flights,
)
from .rate_limiter import RateLimiter
from .retry_handler import RetryHandler, RetryOptions

logger = logging.getLogger(__name__)

Normalizer = Callable[[BaseModel, CabinClass], List[FlightModel]]

NORMALIZERS: Dict[ProviderName, Normalizer] = {
    ProviderName.GDS: normalize_gds_flights,
    ProviderName.NDC: normalize_ndc_flights,
    ProviderName.AGGREGATOR: normalize_aggregator_flights,
}

# Every computed search draws from one shared token bucket
RATE_LIMIT_RESOURCE = "flight-search"


def sort_by_price(flights: Sequence[FlightModel]) -> List[FlightModel]:
    """Sort flights by ascending price, keeping arrival order for equal prices."""
    return sorted(flights, key=lambda flight: flight.price.amount)


def deduplicate_flights(flights: Sequence[FlightModel]) -> List[FlightModel]:
    """Keep the first flight of every (flight number, departure) pair."""
    seen = set()
    unique = []
    for flight in flights:
        if flight.dedup_key in seen:
            continue
        seen.add(flight.dedup_key)
        unique.append(flight)
    return unique


class FlightAggregator:
    """
    Multi-provider flight search with caching and partial-failure tolerance.

    All collaborators are injected so that each instance owns its cache,
    rate limit buckets and in-flight map.
    """

    def __init__(
        self,
        providers: Sequence[FlightProvider],
        cache: Optional[InMemoryCache[SearchResponseModel]] = None,
        rate_limiter: Optional[RateLimiter] = None,
        deduplicator: Optional[RequestDeduplicator] = None,
        retry_handler: Optional[RetryHandler] = None,
        events: Optional[SearchEventLog] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            providers: Upstream providers, one per ``ProviderName``
            cache: Response cache
            rate_limiter: Outbound rate limiter
            deduplicator: In-flight request coalescer
            retry_handler: Retry policy for provider calls
            events: Structured event sink shared with the collaborators
        """
        unknown = [p.name for p in providers if p.name not in NORMALIZERS]
        if unknown:
            raise ValueError(f"No normalizer registered for providers: {unknown}")

        self.providers = list(providers)
        self.events = events or SearchEventLog()
        self.cache = cache if cache is not None else InMemoryCache()
        self.rate_limiter = rate_limiter or RateLimiter()
        self.deduplicator = deduplicator or RequestDeduplicator(events=self.events)
        self.retry_handler = retry_handler or RetryHandler(events=self.events)

        logger.info(
            "FlightAggregator initialized with providers: %s",
            ", ".join(p.name.value for p in self.providers),
        )

    async def search(self, params: SearchParamsModel) -> SearchResponseModel:
        """
        Search all providers for flights matching ``params``.

        Args:
            params: Validated search parameters

        Returns:
            SearchResponseModel: Merged response, ``cached=True`` when served from cache
        """
        cache_key = CacheKeyBuilder.build_search_key(params)

        cached = self.cache.get(cache_key)
        if cached is not None:
            self.events.emit(SearchEventType.CACHE_HIT, key=cache_key, request_id=cached.request_id)
            return cached.model_copy(update={"cached": True})

        self.events.emit(SearchEventType.CACHE_MISS, key=cache_key)
        return await self.deduplicator.deduplicate(
            cache_key, lambda: self._search_providers(cache_key, params)
        )

    async def _search_providers(self, cache_key: str, params: SearchParamsModel) -> SearchResponseModel:
        start_time = time.perf_counter()
        await self.rate_limiter.wait_for_token(RATE_LIMIT_RESOURCE)

        results = await asyncio.gather(
            *(self._fetch_from(provider, params) for provider in self.providers),
            return_exceptions=True,
        )

        flights: List[FlightModel] = []
        stats: Dict[str, ProviderStatsModel] = {}

        for provider, result in zip(self.providers, results):
            if isinstance(result, BaseException):
                self.events.emit(
                    SearchEventType.PROVIDER_FAILED,
                    provider=provider.name.value,
                    error=f"{type(result).__name__}: {result}",
                )
                stats[provider.name.stats_key] = ProviderStatsModel(success=False, count=0)
                continue

            flights.extend(result)
            stats[provider.name.stats_key] = ProviderStatsModel(success=True, count=len(result))

        unique_flights = deduplicate_flights(sort_by_price(flights))

        response = SearchResponseModel(
            flights=unique_flights,
            cached=False,
            providers=ProvidersStatsModel(**stats),
            request_id=str(uuid.uuid4()),
        )
        self.cache.set(cache_key, response)

        self.events.emit(
            SearchEventType.SEARCH_COMPLETED,
            request_id=response.request_id,
            flights=len(unique_flights),
            duplicates_removed=len(flights) - len(unique_flights),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
        )
        return response

    async def _fetch_from(self, provider: FlightProvider, params: SearchParamsModel) -> List[FlightModel]:
        normalize = NORMALIZERS[provider.name]

        async def call_provider() -> List[FlightModel]:
            raw = await provider.search(params)
            return normalize(raw, params.cabin_class)

        return await self.retry_handler.execute(call_provider)

    def get_cache_stats(self) -> CacheStats:
        """Return the response cache statistics."""
        return self.cache.get_stats()


def create_flight_aggregator(
    config: Optional[AggregatorConfig] = None,
    providers: Optional[Sequence[FlightProvider]] = None,
) -> FlightAggregator:
    """
    Build a FlightAggregator wired from configuration.

    Args:
        config: Aggregator configuration, defaults to built-in defaults
        providers: Providers to use instead of the simulated defaults

    Returns:
        FlightAggregator: Ready-to-use aggregator
    """
    config = config or AggregatorConfig()
    events = SearchEventLog()

    return FlightAggregator(
        providers=providers if providers is not None else create_providers(config),
        cache=InMemoryCache(
            default_ttl=config.cache_default_ttl_seconds,
            sweep_interval=config.cache_sweep_interval,
        ),
        rate_limiter=RateLimiter(
            capacity=config.rate_limit_capacity,
            refill_rate=config.rate_limit_refill_rate,
            refill_interval=config.rate_limit_refill_interval_seconds,
            poll_interval=config.rate_limit_poll_interval_seconds,
        ),
        deduplicator=RequestDeduplicator(events=events),
        retry_handler=RetryHandler(
            defaults=RetryOptions(
                max_attempts=config.retry_max_attempts,
                initial_delay=config.retry_initial_delay_seconds,
                max_delay=config.retry_max_delay_seconds,
                backoff_multiplier=config.retry_backoff_multiplier,
            ),
            events=events,
        ),
        events=events,
    )
