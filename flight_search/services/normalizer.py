"""
Flight data normalizer.

Converts each provider's native response schema into unified
``FlightModel`` records. The functions are pure: airport codes are resolved
against static reference data, durations are derived from the timestamps,
and fields a provider does not carry get fixed schema-specific defaults.
"""

from datetime import datetime, timezone
from typing import List

from ..models import (
    AggregatorResponse,
    CabinClass,
    FlightModel,
    GDSResponse,
    NDCResponse,
    PriceModel,
    ProviderName,
    get_airport,
)

GDS_AMENITIES = ("wifi", "meal")
NDC_AMENITIES = ("seat_selection", "priority_boarding")

# Seats assumed available when a provider omits its seat count
GDS_DEFAULT_AVAILABILITY = 9
NDC_DEFAULT_AVAILABILITY = 5
AGGREGATOR_DEFAULT_AVAILABILITY = 3


def parse_instant(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware datetime, assuming UTC when naive."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_gds_flights(
    response: GDSResponse, cabin_class: CabinClass = CabinClass.ECONOMY
) -> List[FlightModel]:
    """Normalize a GDS response. GDS fares always include wifi and a meal."""
    return [
        FlightModel(
            id=flight.pnr,
            provider=ProviderName.GDS,
            airline=flight.carrier,
            flight_number=flight.flight_no,
            origin=get_airport(flight.dep.airport),
            destination=get_airport(flight.arr.airport),
            departure=parse_instant(flight.dep.time),
            arrival=parse_instant(flight.arr.time),
            price=PriceModel(amount=flight.fare.total, currency=flight.fare.curr),
            stops=flight.stops,
            amenities=list(GDS_AMENITIES),
            cabin_class=cabin_class,
            availability=flight.seats if flight.seats is not None else GDS_DEFAULT_AVAILABILITY,
        )
        for flight in response.flights
    ]


def normalize_ndc_flights(
    response: NDCResponse, cabin_class: CabinClass = CabinClass.ECONOMY
) -> List[FlightModel]:
    """Normalize an NDC response. NDC offers are always reported as non-stop."""
    return [
        FlightModel(
            id=offer.offer_id,
            provider=ProviderName.NDC,
            airline=offer.airline.iata,
            flight_number=offer.flight.number,
            origin=get_airport(offer.origin.iata),
            destination=get_airport(offer.destination.iata),
            departure=parse_instant(offer.departure_time),
            arrival=parse_instant(offer.arrival_time),
            price=PriceModel(amount=offer.total_price.value, currency=offer.total_price.currency),
            stops=0,
            amenities=list(NDC_AMENITIES),
            cabin_class=cabin_class,
            availability=(
                offer.seats_remaining
                if offer.seats_remaining is not None
                else NDC_DEFAULT_AVAILABILITY
            ),
        )
        for offer in response.offers
    ]


def normalize_aggregator_flights(
    response: AggregatorResponse, cabin_class: CabinClass = CabinClass.ECONOMY
) -> List[FlightModel]:
    """Normalize a meta-search response. Amenities are not reported."""
    return [
        FlightModel(
            id=result.id,
            provider=ProviderName.AGGREGATOR,
            airline=result.airline_code,
            flight_number=result.flight_num,
            origin=get_airport(result.from_airport),
            destination=get_airport(result.to_airport),
            departure=parse_instant(result.departs),
            arrival=parse_instant(result.arrives),
            price=PriceModel(amount=result.price, currency=result.currency),
            stops=result.layovers,
            amenities=[],
            cabin_class=cabin_class,
            availability=(
                result.seats_left
                if result.seats_left is not None
                else AGGREGATOR_DEFAULT_AVAILABILITY
            ),
        )
        for result in response.results
    ]
