"""
Flight search Pydantic models package.

This package contains all Pydantic v2 models used throughout the flight
search aggregator for validation, serialization, and type safety.
"""

# Enums
from .enums import (
    CabinClass,
    ProviderName,
)

# Reference data and unified records
from .airport import (
    AirportModel,
    AIRPORTS,
    get_airport,
)

from .flight import (
    PriceModel,
    FlightModel,
)

# Request and response models
from .search import (
    SearchParamsModel,
    ProviderStatsModel,
    ProvidersStatsModel,
    SearchResponseModel,
)

# Flight details
from .details import (
    SeatMapModel,
    BaggageAllowanceModel,
    FarePoliciesModel,
    FlightDetailsModel,
)

# Provider-native payloads
from .providers import (
    GDSResponse,
    GDSFlight,
    NDCResponse,
    NDCOffer,
    AggregatorResponse,
    AggregatorResult,
)

__all__ = [
    # Enums
    "CabinClass",
    "ProviderName",

    # Core models
    "AirportModel",
    "AIRPORTS",
    "get_airport",
    "PriceModel",
    "FlightModel",

    # Search models
    "SearchParamsModel",
    "ProviderStatsModel",
    "ProvidersStatsModel",
    "SearchResponseModel",

    # Flight details
    "SeatMapModel",
    "BaggageAllowanceModel",
    "FarePoliciesModel",
    "FlightDetailsModel",

    # Provider payloads
    "GDSResponse",
    "GDSFlight",
    "NDCResponse",
    "NDCOffer",
    "AggregatorResponse",
    "AggregatorResult",
]
