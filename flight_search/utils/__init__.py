"""Configuration utilities for the flight search aggregator."""

from .config import (
    AggregatorConfig,
    ProviderSimulationConfig,
    ConfigurationError,
    load_config,
    get_config,
    reset_config,
)

__all__ = [
    "AggregatorConfig",
    "ProviderSimulationConfig",
    "ConfigurationError",
    "load_config",
    "get_config",
    "reset_config",
]
