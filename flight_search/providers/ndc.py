"""
NDC (New Distribution Capability) provider.

Airline-direct archetype: medium latency (400-1200ms), less reliable
(15% failures, reported as the airline system being unavailable).
"""

from datetime import timedelta

from ..models import NDCResponse, ProviderName, SearchParamsModel
from ..utils.config import ProviderSimulationConfig
from .base import FlightProvider
from .mock_data import departure_at, generate_flight_number, generate_offer_id


class NDCProvider(FlightProvider):
    name = ProviderName.NDC
    error_message = "Airline system unavailable (503)"
    error_status_code = 503

    @classmethod
    def default_config(cls) -> ProviderSimulationConfig:
        return ProviderSimulationConfig(min_latency_ms=400, max_latency_ms=1200, failure_rate=0.15)

    def generate_response(self, params: SearchParamsModel) -> NDCResponse:
        rng = self.rng
        offers = []

        for i in range(rng.randint(2, 5)):
            departure = departure_at(params.departure_date, (7 + i * 3) * 60 + rng.uniform(0, 59))
            arrival = departure + timedelta(minutes=int(rng.uniform(200, 450)))
            flight_no = generate_flight_number(rng)

            offers.append({
                "offerId": generate_offer_id(rng, "NDC", 11),
                "airline": {"iata": flight_no[:2]},
                "flight": {"number": flight_no},
                "origin": {"iata": params.origin},
                "destination": {"iata": params.destination},
                "departureTime": departure.isoformat(),
                "arrivalTime": arrival.isoformat(),
                "totalPrice": {"value": rng.randint(250, 1049), "currency": "USD"},
                "segments": [],
                "seatsRemaining": rng.randint(1, 30),
            })

        return NDCResponse.model_validate({"offers": offers})
