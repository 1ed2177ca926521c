"""
Shared fixtures for the flight search aggregator tests.

Providers are seeded and configured without latency or failures, and
time-dependent components are driven by a manual clock, so no test
depends on wall-clock sleeps.
"""

from datetime import date

import pytest

from flight_search.cache import InMemoryCache
from flight_search.models import SearchParamsModel
from flight_search.providers import GDSProvider, MetasearchProvider, NDCProvider
from flight_search.services import (
    FlightAggregator,
    RateLimiter,
    RequestDeduplicator,
    RetryHandler,
    RetryOptions,
    SearchEventLog,
)
from flight_search.utils.config import ProviderSimulationConfig, reset_config


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def instant_config(failure_rate: float = 0.0) -> ProviderSimulationConfig:
    return ProviderSimulationConfig(min_latency_ms=0, max_latency_ms=0, failure_rate=failure_rate)


@pytest.fixture(autouse=True)
def clean_global_config(monkeypatch, tmp_path):
    """Isolate tests from any .env file and from the cached global config."""
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def search_params():
    return SearchParamsModel(origin="JFK", destination="LAX", departure_date=date(2025, 12, 15))


@pytest.fixture
def events():
    return SearchEventLog()


@pytest.fixture
def providers():
    """Seeded providers that answer immediately and never fail."""
    return [
        GDSProvider(instant_config(), seed=1),
        NDCProvider(instant_config(), seed=2),
        MetasearchProvider(instant_config(), seed=3),
    ]


@pytest.fixture
def fast_retry_handler(events):
    return RetryHandler(defaults=RetryOptions(initial_delay=0.0, max_delay=0.0), events=events)


@pytest.fixture
def make_aggregator(events, fast_retry_handler):
    """Factory building an aggregator around the given providers."""

    def _make(providers, cache=None):
        return FlightAggregator(
            providers=providers,
            cache=cache if cache is not None else InMemoryCache(),
            rate_limiter=RateLimiter(capacity=100, poll_interval=0.001),
            deduplicator=RequestDeduplicator(events=events),
            retry_handler=fast_retry_handler,
            events=events,
        )

    return _make


@pytest.fixture
def aggregator(make_aggregator, providers):
    return make_aggregator(providers)
