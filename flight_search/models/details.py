"""
Flight details models for the flight search aggregator.

This module contains the per-flight details served alongside search
results: aircraft, seat map summary, baggage allowance and fare policies.
"""

from typing import List
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel


class _DetailsModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SeatMapModel(_DetailsModel):
    """Seat map summary."""
    rows: int = Field(..., ge=1)
    seats_per_row: int = Field(..., ge=1)
    available: int = Field(..., ge=0, description="Seats still available")


class BaggageAllowanceModel(_DetailsModel):
    checked_bags: int = Field(default=0, ge=0)
    carry_on: int = Field(default=0, ge=0)
    personal: int = Field(default=0, ge=0)


class FarePoliciesModel(_DetailsModel):
    cancellation: str
    changes: str


class FlightDetailsModel(_DetailsModel):
    """Details of a single flight offer."""
    id: str = Field(..., description="Provider-scoped offer identifier")
    aircraft: str
    seat_map: SeatMapModel
    baggage: BaggageAllowanceModel
    meals: List[str] = Field(default_factory=list)
    entertainment: bool = False
    wifi: bool = False
    policies: FarePoliciesModel
