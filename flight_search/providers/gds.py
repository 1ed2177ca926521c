"""
GDS (Global Distribution System) provider.

Legacy airline-inventory archetype: slow (800-2000ms), moderately reliable
(10% failures surfacing as connection timeouts).
"""

from datetime import timedelta

from ..models import GDSResponse, ProviderName, SearchParamsModel
from ..utils.config import ProviderSimulationConfig
from .base import FlightProvider
from .mock_data import departure_at, generate_flight_number, generate_offer_id


class GDSProvider(FlightProvider):
    name = ProviderName.GDS
    error_message = "Connection timeout"
    error_status_code = 504

    @classmethod
    def default_config(cls) -> ProviderSimulationConfig:
        return ProviderSimulationConfig(min_latency_ms=800, max_latency_ms=2000, failure_rate=0.1)

    def generate_response(self, params: SearchParamsModel) -> GDSResponse:
        rng = self.rng
        flights = []

        for i in range(rng.randint(3, 7)):
            departure = departure_at(params.departure_date, (6 + i * 2) * 60 + rng.uniform(0, 59))
            arrival = departure + timedelta(minutes=int(rng.uniform(180, 480)))
            flight_no = generate_flight_number(rng)

            flights.append({
                "pnr": generate_offer_id(rng, "GDS", 9),
                "carrier": flight_no[:2],
                "flightNo": flight_no,
                "dep": {"airport": params.origin, "time": departure.isoformat()},
                "arr": {"airport": params.destination, "time": arrival.isoformat()},
                "fare": {"total": rng.randint(300, 999), "curr": "USD"},
                "stops": 1 if rng.random() > 0.7 else 0,
                "seats": rng.randint(1, 9),
            })

        return GDSResponse.model_validate({"flights": flights})
