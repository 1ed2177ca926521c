"""
Tests for the HTTP adapter.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from flight_search.api import create_app


@pytest.fixture
def client(aggregator):
    return TestClient(create_app(aggregator, details_lookup_delay=0))


VALID_SEARCH = {
    "origin": "JFK",
    "destination": "LAX",
    "departure_date": "2025-12-15",
    "passengers": 2,
    "cabin_class": "economy",
}


class TestSearchEndpoint:
    """Test POST /api/flights/search."""

    def test_search_returns_merged_flights(self, client):
        """Test a valid search returns the aggregated response."""
        response = client.post("/api/flights/search", json=VALID_SEARCH)

        assert response.status_code == 200
        data = response.json()
        assert data["cached"] is False
        assert data["flights"]
        assert set(data["providers"]) == {"gds", "ndc", "aggregator"}
        assert all("duration" in f for f in data["flights"])

        prices = [f["price"]["amount"] for f in data["flights"]]
        assert prices == sorted(prices)

    def test_camel_case_body_accepted(self, client):
        """Test the camelCase wire format used by web clients."""
        response = client.post("/api/flights/search", json={
            "origin": "JFK",
            "destination": "LAX",
            "departureDate": "2025-06-01",
            "passengers": 1,
            "cabinClass": "economy",
        })

        assert response.status_code == 200
        data = response.json()
        assert "requestId" in data
        assert all("flightNumber" in f and "cabinClass" in f for f in data["flights"])
        assert all("flight_number" not in f for f in data["flights"])

    def test_repeated_search_is_cached(self, client):
        """Test the second identical request is served from cache."""
        first = client.post("/api/flights/search", json=VALID_SEARCH).json()
        second = client.post("/api/flights/search", json=VALID_SEARCH).json()

        assert second["cached"] is True
        assert second["requestId"] == first["requestId"]

    @pytest.mark.parametrize("payload", [
        {**VALID_SEARCH, "origin": "JF"},
        {**VALID_SEARCH, "passengers": 0},
        {**VALID_SEARCH, "cabin_class": "luxury"},
        {**VALID_SEARCH, "departure_date": "15-12-2025"},
        {**VALID_SEARCH, "return_date": "2025-12-01"},
        {"origin": "JFK"},
    ])
    def test_invalid_input_rejected(self, client, providers, payload):
        """Test invalid searches are rejected before reaching providers."""
        response = client.post("/api/flights/search", json=payload)

        assert response.status_code == 422
        assert all(p.call_count == 0 for p in providers)

    def test_unexpected_error_returns_500(self, aggregator):
        """Test unexpected failures map to a generic error body."""
        aggregator.search = AsyncMock(side_effect=RuntimeError("boom"))
        client = TestClient(create_app(aggregator))

        response = client.post("/api/flights/search", json=VALID_SEARCH)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestMonitoringEndpoints:
    """Test cache statistics and health endpoints."""

    def test_cache_stats(self, client):
        """Test GET returns cache statistics."""
        client.post("/api/flights/search", json=VALID_SEARCH)
        client.post("/api/flights/search", json=VALID_SEARCH)

        response = client.get("/api/flights/search")

        assert response.status_code == 200
        assert response.json() == {"size": 1, "hits": 1, "misses": 1, "hitRate": 0.5}

    def test_health(self, client):
        """Test the health endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_request_headers(self, client):
        """Test every response carries request id and processing time."""
        response = client.get("/health")

        assert len(response.headers["x-request-id"]) == 36
        assert response.headers["x-processing-time"].endswith("ms")

    def test_default_aggregator_from_config(self):
        """Test an app without an explicit aggregator builds its own."""
        app = create_app()
        assert app.state.aggregator.get_cache_stats().size == 0


class TestFlightDetailsEndpoint:
    """Test GET /api/flights/{id}."""

    def test_details_returned(self, client):
        """Test a well-formed id returns the flight details."""
        response = client.get("/api/flights/GDS-UA100-1")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "GDS-UA100-1"
        assert data["seatMap"]["seatsPerRow"] == 6
        assert data["baggage"]["checkedBags"] == 2
        assert data["policies"]["cancellation"]

    def test_details_stable_per_id(self, client):
        """Test repeated lookups of one id agree."""
        first = client.get("/api/flights/NDC-DL200-3").json()
        second = client.get("/api/flights/NDC-DL200-3").json()
        assert first == second

    def test_malformed_id_not_found(self, client):
        """Test ids outside the offer id alphabet return 404."""
        response = client.get("/api/flights/bad%20id!")

        assert response.status_code == 404
        assert response.json() == {"error": "Flight not found"}
