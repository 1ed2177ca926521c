"""Shared mock-data helpers for the simulated providers."""

import random
import string
from datetime import date, datetime, time, timedelta, timezone
from typing import Sequence

from ..models import (
    BaggageAllowanceModel,
    FarePoliciesModel,
    FlightDetailsModel,
    SeatMapModel,
)

AIRLINES = ["AA", "DL", "UA", "BA", "SQ", "EK", "QF", "LH"]

_ID_ALPHABET = string.ascii_uppercase + string.digits


def generate_flight_number(rng: random.Random, airlines: Sequence[str] = AIRLINES) -> str:
    """Generate a flight number such as ``UA4821``."""
    return f"{rng.choice(airlines)}{rng.randint(1000, 9999)}"


def generate_offer_id(rng: random.Random, prefix: str, length: int) -> str:
    """Generate an upper-case alphanumeric identifier with a provider prefix."""
    return prefix + "".join(rng.choice(_ID_ALPHABET) for _ in range(length))


def departure_at(day: date, minutes_after_midnight: float) -> datetime:
    """UTC instant on ``day`` offset by a number of minutes."""
    midnight = datetime.combine(day, time(0, 0), tzinfo=timezone.utc)
    return midnight + timedelta(minutes=int(minutes_after_midnight))


def generate_flight_details(flight_id: str) -> FlightDetailsModel:
    """
    Build mock details for a flight offer.

    The seat availability is derived from the id, so repeated lookups of
    the same flight agree with each other.
    """
    rng = random.Random(flight_id)
    return FlightDetailsModel(
        id=flight_id,
        aircraft="Boeing 787-9",
        seat_map=SeatMapModel(rows=30, seats_per_row=6, available=rng.randint(50, 149)),
        baggage=BaggageAllowanceModel(checked_bags=2, carry_on=1, personal=1),
        meals=["breakfast", "lunch"],
        entertainment=True,
        wifi=True,
        policies=FarePoliciesModel(
            cancellation="Full refund within 24 hours",
            changes="Change fee applies after 24 hours",
        ),
    )
