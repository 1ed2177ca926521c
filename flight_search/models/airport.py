"""
Airport-related Pydantic models for the flight search aggregator.

This module contains the airport descriptor model and the static reference
data used to resolve IATA codes reported by providers.
"""

from typing import Dict
from pydantic import BaseModel, Field, ConfigDict


class AirportModel(BaseModel):
    """Airport information model."""
    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="IATA airport code")
    name: str = Field(..., description="Airport name")
    city: str = Field(..., description="City served by the airport")
    country: str = Field(..., description="Country name")
    timezone: str = Field(..., description="IANA timezone name")


AIRPORTS: Dict[str, AirportModel] = {
    airport.code: airport
    for airport in (
        AirportModel(code="JFK", name="John F. Kennedy International Airport",
                     city="New York", country="USA", timezone="America/New_York"),
        AirportModel(code="LAX", name="Los Angeles International Airport",
                     city="Los Angeles", country="USA", timezone="America/Los_Angeles"),
        AirportModel(code="SFO", name="San Francisco International Airport",
                     city="San Francisco", country="USA", timezone="America/Los_Angeles"),
        AirportModel(code="ORD", name="O'Hare International Airport",
                     city="Chicago", country="USA", timezone="America/Chicago"),
        AirportModel(code="MIA", name="Miami International Airport",
                     city="Miami", country="USA", timezone="America/New_York"),
        AirportModel(code="DFW", name="Dallas/Fort Worth International Airport",
                     city="Dallas", country="USA", timezone="America/Chicago"),
        AirportModel(code="SEA", name="Seattle-Tacoma International Airport",
                     city="Seattle", country="USA", timezone="America/Los_Angeles"),
        AirportModel(code="BOS", name="Logan International Airport",
                     city="Boston", country="USA", timezone="America/New_York"),
        AirportModel(code="ATL", name="Hartsfield-Jackson Atlanta International Airport",
                     city="Atlanta", country="USA", timezone="America/New_York"),
        AirportModel(code="DEN", name="Denver International Airport",
                     city="Denver", country="USA", timezone="America/Denver"),
        AirportModel(code="LHR", name="London Heathrow Airport",
                     city="London", country="UK", timezone="Europe/London"),
        AirportModel(code="SIN", name="Singapore Changi Airport",
                     city="Singapore", country="Singapore", timezone="Asia/Singapore"),
        AirportModel(code="DXB", name="Dubai International Airport",
                     city="Dubai", country="UAE", timezone="Asia/Dubai"),
        AirportModel(code="HND", name="Tokyo Haneda Airport",
                     city="Tokyo", country="Japan", timezone="Asia/Tokyo"),
        AirportModel(code="CGK", name="Soekarno-Hatta International Airport",
                     city="Jakarta", country="Indonesia", timezone="Asia/Jakarta"),
    )
}


def get_airport(code: str) -> AirportModel:
    """
    Resolve an IATA code to its airport descriptor.

    Unknown codes resolve to a placeholder that carries the code as code,
    name and city, with country "Unknown" and timezone "UTC".

    Args:
        code: IATA airport code (case-insensitive)

    Returns:
        AirportModel: Reference or placeholder airport
    """
    normalized = code.upper()
    airport = AIRPORTS.get(normalized)
    if airport is not None:
        return airport

    return AirportModel(
        code=normalized,
        name=normalized,
        city=normalized,
        country="Unknown",
        timezone="UTC",
    )
