"""
Search request and response models for the flight search aggregator.

This module contains the closed search parameter model used as the cache
key source, and the aggregated response returned to callers.
"""

from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .enums import CabinClass, ProviderName
from .flight import FlightModel


class SearchParamsModel(BaseModel):
    """
    Normalized flight search request.

    Immutable per request and used verbatim as the cache key source.
    Fields are accepted under their camelCase wire names (``departureDate``)
    or their Python names. Unknown fields are rejected.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True)

    origin: str = Field(..., min_length=3, max_length=3, description="Origin IATA code")
    destination: str = Field(..., min_length=3, max_length=3, description="Destination IATA code")
    departure_date: date = Field(..., description="Outbound departure date")
    return_date: Optional[date] = Field(None, description="Inbound departure date")
    passengers: int = Field(default=1, ge=1, le=9, description="Number of passengers")
    cabin_class: CabinClass = Field(default=CabinClass.ECONOMY)

    @field_validator("origin", "destination")
    @classmethod
    def validate_airport_code(cls, v: str) -> str:
        """Airport codes are three letters, stored upper-case."""
        if not v.isalpha():
            raise ValueError("Airport code must contain letters only")
        return v.upper()

    @model_validator(mode="after")
    def validate_dates(self) -> "SearchParamsModel":
        """Ensure the return leg does not precede the outbound leg."""
        if self.return_date is not None and self.return_date < self.departure_date:
            raise ValueError("return_date must not be earlier than departure_date")
        return self


class ProviderStatsModel(BaseModel):
    """Outcome of a single provider branch."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    success: bool = False
    count: int = Field(default=0, ge=0, description="Flights normalized from this provider")


class ProvidersStatsModel(BaseModel):
    """Per-provider outcomes of one search."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    gds: ProviderStatsModel = Field(default_factory=ProviderStatsModel)
    ndc: ProviderStatsModel = Field(default_factory=ProviderStatsModel)
    aggregator: ProviderStatsModel = Field(default_factory=ProviderStatsModel)

    def for_provider(self, provider: ProviderName) -> ProviderStatsModel:
        """Return the stats entry for a provider."""
        return getattr(self, provider.stats_key)

    @property
    def all_failed(self) -> bool:
        return not (self.gds.success or self.ndc.success or self.aggregator.success)


class SearchResponseModel(BaseModel):
    """
    Aggregated search result.

    Flights are ordered by ascending price. A response served from the
    cache keeps the request id of the computation that produced it and
    only differs by ``cached=True``.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    flights: List[FlightModel] = Field(default_factory=list)
    cached: bool = False
    providers: ProvidersStatsModel = Field(default_factory=ProvidersStatsModel)
    request_id: str = Field(..., description="Correlation id of the computation")
