"""
Enums for the flight search aggregator.

This module contains the enumeration types shared by request, response
and provider models.
"""

from enum import Enum


class CabinClass(str, Enum):
    """Cabin class requested by the traveller."""
    ECONOMY = "economy"
    PREMIUM_ECONOMY = "premium_economy"
    BUSINESS = "business"
    FIRST = "first"


class ProviderName(str, Enum):
    """Upstream provider archetypes a flight can originate from."""
    GDS = "GDS"                # Legacy global distribution system
    NDC = "NDC"                # Airline-direct New Distribution Capability
    AGGREGATOR = "AGGREGATOR"  # Meta-search upstream

    @property
    def stats_key(self) -> str:
        """Key used for this provider in per-provider response stats."""
        return self.value.lower()
