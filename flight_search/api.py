"""
HTTP adapter for the flight search aggregator.

Exposes the aggregator through FastAPI. Request bodies are validated
against ``SearchParamsModel`` before they reach the core, so invalid input
is answered with 422 and never triggers an upstream call. JSON bodies use
camelCase field names (``departureDate``, ``requestId``).
"""

import asyncio
import logging
import re
import time
import uuid
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .models import FlightDetailsModel, SearchParamsModel, SearchResponseModel
from .providers.mock_data import generate_flight_details
from .services import FlightAggregator, create_flight_aggregator
from .utils.config import get_config

logger = logging.getLogger(__name__)

FLIGHT_ID_PATTERN = re.compile(r"^[A-Za-z0-9-]{1,64}$")


def create_app(
    aggregator: Optional[FlightAggregator] = None,
    details_lookup_delay: float = 0.2,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        aggregator: Aggregator serving the routes, built from the global
            configuration when omitted
        details_lookup_delay: Simulated lookup latency of the flight details route, in seconds

    Returns:
        FastAPI: Configured application
    """
    config = get_config()
    app = FastAPI(title="Flight Search Aggregator", debug=config.debug)
    app.state.aggregator = aggregator or create_flight_aggregator(config)

    @app.middleware("http")
    async def add_request_headers(request: Request, call_next):
        start_time = time.perf_counter()
        request_id = str(uuid.uuid4())
        logger.debug(f"{request.method} {request.url.path} ({request_id})")

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        response.headers["x-request-id"] = request_id
        response.headers["x-processing-time"] = f"{elapsed_ms:.0f}ms"
        return response

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/flights/search", response_model=SearchResponseModel)
    async def search_flights(params: SearchParamsModel, request: Request):
        try:
            return await request.app.state.aggregator.search(params)
        except Exception:
            logger.exception("Search error")
            return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/api/flights/search")
    async def cache_stats(request: Request) -> Dict[str, Any]:
        """Cache statistics, useful for monitoring."""
        stats = request.app.state.aggregator.get_cache_stats()
        return {
            "size": stats.size,
            "hits": stats.hits,
            "misses": stats.misses,
            "hitRate": stats.hit_rate,
        }

    @app.get("/api/flights/{flight_id}", response_model=FlightDetailsModel)
    async def flight_details(flight_id: str):
        if not FLIGHT_ID_PATTERN.match(flight_id):
            return JSONResponse(status_code=404, content={"error": "Flight not found"})

        await asyncio.sleep(details_lookup_delay)
        return generate_flight_details(flight_id)

    return app
