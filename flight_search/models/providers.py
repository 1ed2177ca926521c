"""
Provider-native response models.

Each upstream speaks its own schema. These models mirror the raw payloads
field for field (native camelCase names are kept as aliases) so that a
provider client can validate a JSON body before handing it to the matching
normalizer.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class _RawModel(BaseModel):
    """Base for raw provider payloads, populated by alias or by field name."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


# GDS (legacy distribution system)

class GDSEndpoint(_RawModel):
    airport: str
    time: str


class GDSFare(_RawModel):
    total: float
    curr: str


class GDSFlight(_RawModel):
    pnr: str
    carrier: str
    flight_no: str = Field(..., alias="flightNo")
    dep: GDSEndpoint
    arr: GDSEndpoint
    fare: GDSFare
    stops: int = 0
    seats: Optional[int] = None


class GDSResponse(_RawModel):
    flights: List[GDSFlight] = Field(default_factory=list)


# NDC (airline direct)

class NDCAirline(_RawModel):
    iata: str


class NDCFlightNumber(_RawModel):
    number: str


class NDCLocation(_RawModel):
    iata: str


class NDCPrice(_RawModel):
    value: float
    currency: str


class NDCSegment(_RawModel):
    departure: str
    arrival: str
    duration: int


class NDCOffer(_RawModel):
    offer_id: str = Field(..., alias="offerId")
    airline: NDCAirline
    flight: NDCFlightNumber
    origin: NDCLocation
    destination: NDCLocation
    departure_time: str = Field(..., alias="departureTime")
    arrival_time: str = Field(..., alias="arrivalTime")
    total_price: NDCPrice = Field(..., alias="totalPrice")
    segments: List[NDCSegment] = Field(default_factory=list)
    seats_remaining: Optional[int] = Field(None, alias="seatsRemaining")


class NDCResponse(_RawModel):
    offers: List[NDCOffer] = Field(default_factory=list)


# Meta-search aggregator

class AggregatorResult(_RawModel):
    id: str
    airline_code: str = Field(..., alias="airlineCode")
    flight_num: str = Field(..., alias="flightNum")
    from_airport: str = Field(..., alias="from")
    to_airport: str = Field(..., alias="to")
    departs: str
    arrives: str
    price: float
    currency: str
    layovers: int = 0
    seats_left: Optional[int] = Field(None, alias="seatsLeft")


class AggregatorResponse(_RawModel):
    results: List[AggregatorResult] = Field(default_factory=list)
