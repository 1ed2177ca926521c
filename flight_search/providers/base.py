"""
Base class for simulated upstream flight providers.

A provider behaves like an opaque remote API: every call takes a random
latency within its configured range and fails with its configured
probability. On success it returns a payload in its own native schema,
which only the matching normalizer understands.
"""

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from ..models import ProviderName, SearchParamsModel
from ..utils.config import ProviderSimulationConfig

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """Failure reported by an upstream provider."""

    def __init__(self, message: str, provider: Optional[ProviderName] = None, status_code: int = 502):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class FlightProvider(ABC):
    """
    Simulated upstream flight provider.

    Subclasses define the provider name, its failure message and status,
    and how a raw response is generated for a search.
    """

    name: ProviderName
    error_message: str = "Service error"
    error_status_code: int = 502

    def __init__(self, config: Optional[ProviderSimulationConfig] = None, seed: Optional[int] = None):
        """
        Initialize the provider.

        Args:
            config: Latency and failure profile, defaults to the provider's own profile
            seed: Seed for the provider's random generator
        """
        self.config = config or self.default_config()
        self.rng = random.Random(seed)
        self.call_count = 0

    @classmethod
    def default_config(cls) -> ProviderSimulationConfig:
        return ProviderSimulationConfig()

    async def search(self, params: SearchParamsModel) -> BaseModel:
        """
        Search flights for ``params``.

        Returns:
            Provider-native response model

        Raises:
            ProviderError: When the simulated call fails
        """
        self.call_count += 1
        logger.info(
            "[%s] Searching flights %s -> %s on %s",
            self.name.value, params.origin, params.destination, params.departure_date,
        )

        await self.simulate_network_delay()

        if self.should_simulate_error():
            raise ProviderError(
                f"{self.name.value} API Error: {self.error_message}",
                provider=self.name,
                status_code=self.error_status_code,
            )

        return self.generate_response(params)

    async def simulate_network_delay(self) -> None:
        delay_ms = self.rng.uniform(self.config.min_latency_ms, self.config.max_latency_ms)
        await asyncio.sleep(delay_ms / 1000)

    def should_simulate_error(self) -> bool:
        return self.rng.random() < self.config.failure_rate

    @abstractmethod
    def generate_response(self, params: SearchParamsModel) -> BaseModel:
        """Build the provider-native payload for a successful call."""
