"""
Environment configuration loader with validation for the flight search aggregator.
"""

import os
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from dotenv import load_dotenv


class ConfigurationError(ValueError):
    """Raised when the environment holds an invalid configuration."""
    pass


class ProviderSimulationConfig(BaseModel):
    """Latency and reliability profile of a simulated upstream provider."""

    min_latency_ms: int = Field(default=300, ge=0, description="Minimum response latency in milliseconds")
    max_latency_ms: int = Field(default=1500, ge=0, description="Maximum response latency in milliseconds")
    failure_rate: float = Field(
        default=0.1, ge=0.0, le=1.0, description="Probability that a call fails (0.0-1.0)"
    )

    @model_validator(mode="after")
    def validate_latency_range(self) -> "ProviderSimulationConfig":
        """Ensure max latency is greater than or equal to min latency."""
        if self.max_latency_ms < self.min_latency_ms:
            raise ValueError("Maximum latency must be greater than or equal to minimum latency")
        return self


class AggregatorConfig(BaseModel):
    """Configuration model for the flight search aggregator with validation."""

    # Cache Configuration
    cache_default_ttl_seconds: float = Field(
        default=300.0, ge=0, description="Default TTL of cached search responses"
    )
    cache_sweep_interval: int = Field(
        default=100, ge=1, description="Insertions between expired-entry sweeps"
    )

    # Rate Limiter Configuration
    rate_limit_capacity: int = Field(default=10, ge=1, description="Token bucket capacity")
    rate_limit_refill_rate: float = Field(
        default=1.0, gt=0, description="Tokens added per refill interval"
    )
    rate_limit_refill_interval_seconds: float = Field(
        default=1.0, gt=0, description="Refill interval in seconds"
    )
    rate_limit_poll_interval_seconds: float = Field(
        default=0.1, gt=0, description="Polling interval while waiting for a token"
    )

    # Retry Configuration
    retry_max_attempts: int = Field(default=3, ge=1, description="Attempts per provider call")
    retry_initial_delay_seconds: float = Field(
        default=1.0, ge=0, description="Delay before the first retry"
    )
    retry_max_delay_seconds: float = Field(default=10.0, ge=0, description="Backoff delay cap")
    retry_backoff_multiplier: float = Field(default=2.0, ge=1.0, description="Backoff growth factor")

    # Provider Simulation
    gds: ProviderSimulationConfig = Field(
        default_factory=lambda: ProviderSimulationConfig(
            min_latency_ms=800, max_latency_ms=2000, failure_rate=0.1
        )
    )
    ndc: ProviderSimulationConfig = Field(
        default_factory=lambda: ProviderSimulationConfig(
            min_latency_ms=400, max_latency_ms=1200, failure_rate=0.15
        )
    )
    aggregator: ProviderSimulationConfig = Field(
        default_factory=lambda: ProviderSimulationConfig(
            min_latency_ms=300, max_latency_ms=800, failure_rate=0.05
        )
    )
    provider_seed: Optional[int] = Field(
        default=None, description="Seed for reproducible provider simulations"
    )

    # Application
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @model_validator(mode="after")
    def validate_retry_delays(self) -> "AggregatorConfig":
        """Ensure the backoff cap is not below the initial delay."""
        if self.retry_max_delay_seconds < self.retry_initial_delay_seconds:
            raise ValueError("Maximum retry delay must be greater than or equal to the initial delay")
        return self


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes", "on")


def _provider_env(prefix: str, min_latency: int, max_latency: int, failure_rate: float) -> Dict[str, Any]:
    return {
        "min_latency_ms": int(os.getenv(f"{prefix}_MIN_LATENCY_MS", str(min_latency))),
        "max_latency_ms": int(os.getenv(f"{prefix}_MAX_LATENCY_MS", str(max_latency))),
        "failure_rate": float(os.getenv(f"{prefix}_FAILURE_RATE", str(failure_rate))),
    }


def load_config(env_file: Optional[str] = None) -> AggregatorConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in current directory.

    Returns:
        AggregatorConfig: Validated configuration object

    Raises:
        ConfigurationError: If configuration is missing or invalid
    """
    if env_file is None:
        env_file = ".env"

    if os.path.exists(env_file):
        load_dotenv(env_file)

    seed = os.getenv("PROVIDER_SEED")

    try:
        config_data: Dict[str, Any] = {
            "cache_default_ttl_seconds": float(os.getenv("CACHE_DEFAULT_TTL_SECONDS", "300")),
            "cache_sweep_interval": int(os.getenv("CACHE_SWEEP_INTERVAL", "100")),
            "rate_limit_capacity": int(os.getenv("RATE_LIMIT_CAPACITY", "10")),
            "rate_limit_refill_rate": float(os.getenv("RATE_LIMIT_REFILL_RATE", "1.0")),
            "rate_limit_refill_interval_seconds": float(
                os.getenv("RATE_LIMIT_REFILL_INTERVAL_SECONDS", "1.0")
            ),
            "rate_limit_poll_interval_seconds": float(
                os.getenv("RATE_LIMIT_POLL_INTERVAL_SECONDS", "0.1")
            ),
            "retry_max_attempts": int(os.getenv("RETRY_MAX_ATTEMPTS", "3")),
            "retry_initial_delay_seconds": float(os.getenv("RETRY_INITIAL_DELAY_SECONDS", "1.0")),
            "retry_max_delay_seconds": float(os.getenv("RETRY_MAX_DELAY_SECONDS", "10.0")),
            "retry_backoff_multiplier": float(os.getenv("RETRY_BACKOFF_MULTIPLIER", "2.0")),
            "gds": _provider_env("GDS", 800, 2000, 0.1),
            "ndc": _provider_env("NDC", 400, 1200, 0.15),
            "aggregator": _provider_env("AGGREGATOR", 300, 800, 0.05),
            "provider_seed": int(seed) if seed else None,
            "debug": _env_bool("DEBUG", "false"),
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
        }
        return AggregatorConfig(**config_data)
    except (ValueError, ValidationError) as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


# Global configuration instance
_config: Optional[AggregatorConfig] = None


def get_config() -> AggregatorConfig:
    """
    Get the global configuration instance, loading it if necessary.

    Returns:
        AggregatorConfig: The global configuration object
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the global configuration so the next access reloads it."""
    global _config
    _config = None
