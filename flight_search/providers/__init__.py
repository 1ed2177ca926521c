"""
Simulated upstream flight providers.

Each provider mimics a remote API archetype with its own latency, failure
rate and native response schema.
"""

from typing import List, Optional

from ..utils.config import AggregatorConfig
from .base import FlightProvider, ProviderError
from .gds import GDSProvider
from .ndc import NDCProvider
from .metasearch import MetasearchProvider


def create_providers(config: Optional[AggregatorConfig] = None) -> List[FlightProvider]:
    """
    Create the GDS, NDC and meta-search providers in fan-out order.

    Args:
        config: Aggregator configuration with per-provider simulation profiles

    Returns:
        List[FlightProvider]: Configured providers
    """
    config = config or AggregatorConfig()
    seed = config.provider_seed

    def provider_seed(offset: int) -> Optional[int]:
        return seed + offset if seed is not None else None

    return [
        GDSProvider(config.gds, seed=provider_seed(0)),
        NDCProvider(config.ndc, seed=provider_seed(1)),
        MetasearchProvider(config.aggregator, seed=provider_seed(2)),
    ]


__all__ = [
    "FlightProvider",
    "ProviderError",
    "GDSProvider",
    "NDCProvider",
    "MetasearchProvider",
    "create_providers",
]
