"""
Meta-search aggregator provider.

Skyscanner/Kayak-style archetype: fast (300-800ms, heavily cached upstream),
highly reliable (5% failures, reported as upstream rate limiting).
"""

from datetime import timedelta

from ..models import AggregatorResponse, ProviderName, SearchParamsModel
from ..utils.config import ProviderSimulationConfig
from .base import FlightProvider
from .mock_data import departure_at, generate_flight_number, generate_offer_id

METASEARCH_AIRLINES = ["AA", "DL", "UA", "QF", "AI"]


class MetasearchProvider(FlightProvider):
    name = ProviderName.AGGREGATOR
    error_message = "Rate limit exceeded (429)"
    error_status_code = 429

    @classmethod
    def default_config(cls) -> ProviderSimulationConfig:
        return ProviderSimulationConfig(min_latency_ms=300, max_latency_ms=800, failure_rate=0.05)

    def generate_response(self, params: SearchParamsModel) -> AggregatorResponse:
        rng = self.rng
        results = []

        for i in range(rng.randint(5, 12)):
            departure = departure_at(params.departure_date, 5 * 60 + i * 90 + rng.uniform(0, 59))
            arrival = departure + timedelta(minutes=int(rng.uniform(190, 470)))
            flight_num = generate_flight_number(rng, METASEARCH_AIRLINES)

            results.append({
                "id": generate_offer_id(rng, "AGG", 10),
                "airlineCode": flight_num[:2],
                "flightNum": flight_num,
                "from": params.origin,
                "to": params.destination,
                "departs": departure.isoformat(),
                "arrives": arrival.isoformat(),
                "price": rng.randint(280, 1029),
                "currency": "USD",
                "layovers": 1 if rng.random() > 0.6 else 0,
                "seatsLeft": rng.randint(1, 20),
            })

        return AggregatorResponse.model_validate({"results": results})
