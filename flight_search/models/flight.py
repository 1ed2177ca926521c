"""
Flight-related Pydantic models for the flight search aggregator.

This module contains the unified flight record every provider response is
normalized into, together with its price component.
"""

from datetime import datetime
from typing import List
from pydantic import BaseModel, Field, ConfigDict, computed_field
from pydantic.alias_generators import to_camel

from .enums import CabinClass, ProviderName
from .airport import AirportModel


class PriceModel(BaseModel):
    """Fare amount and currency."""
    model_config = ConfigDict(frozen=True)

    amount: float = Field(..., ge=0, description="Total fare amount")
    currency: str = Field(..., min_length=3, max_length=3, description="ISO 4217 currency code")


class FlightModel(BaseModel):
    """
    Unified flight record produced by the normalizers.

    Records are created fresh per search from one provider's raw payload
    and never mutated afterwards. Duration is always derived from the
    departure and arrival timestamps.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Provider-scoped offer identifier")
    provider: ProviderName = Field(..., description="Provider the record came from")
    airline: str = Field(..., description="Airline code")
    flight_number: str = Field(..., description="Marketing flight number")
    origin: AirportModel
    destination: AirportModel
    departure: datetime = Field(..., description="Departure instant")
    arrival: datetime = Field(..., description="Arrival instant")
    price: PriceModel
    stops: int = Field(default=0, ge=0, description="Number of stops")
    amenities: List[str] = Field(default_factory=list, description="On-board amenities")
    cabin_class: CabinClass = Field(default=CabinClass.ECONOMY)
    availability: int = Field(default=0, ge=0, description="Seats available at this fare")

    @computed_field
    @property
    def duration(self) -> int:
        """Flight duration in whole minutes."""
        return int((self.arrival - self.departure).total_seconds() // 60)

    @property
    def dedup_key(self) -> tuple:
        """Identity used to collapse the same flight offered by several providers."""
        return (self.flight_number, self.departure)
