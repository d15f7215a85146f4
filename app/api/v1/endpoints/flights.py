# app/api/v1/endpoints/flights.py
"""
Flight Endpoints
Read-only proxy over SerpApi Google Flights: a 6-month price calendar and a
single-date search. Errors are returned as {"error": ..., "message": ...}.
"""

import logging
from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import get_app_settings, get_calendar_service, get_search_service
from app.core.config import Settings
from schemas.common import ErrorResponse
from services.exceptions import (
    FlightProxyError,
    InternalError,
    InvalidParameterError,
    MissingParameterError,
)
from services.flight_search_service import FlightSearchService
from services.price_calendar_service import PriceCalendarService

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid query parameter"},
    500: {"model": ErrorResponse, "description": "API key not configured or internal error"},
}


def parse_trip_duration(raw: Optional[str], default: int) -> int:
    """Parse tripDuration as a positive whole number of days."""
    if raw is None or raw == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise InvalidParameterError(f"tripDuration must be a whole number of days, got '{raw}'")
    if value < 1:
        raise InvalidParameterError("tripDuration must be at least 1 day")
    return value


def parse_iso_date(raw: str, field_name: str) -> date:
    try:
        return date.fromisoformat(raw.strip())
    except ValueError:
        raise InvalidParameterError(f"Invalid {field_name} format. Use YYYY-MM-DD")


def with_cached_flag(payload: Dict[str, Any], cached: bool) -> Dict[str, Any]:
    # cached payloads are shared with the cache, never mutate them
    return {**payload, "cached": True} if cached else payload


@router.get("/price-calendar", responses=ERROR_RESPONSES)
async def get_price_calendar(
    origin: Optional[str] = Query(None, description="Origin airport code, e.g. JFK"),
    destination: Optional[str] = Query(None, description="Destination airport code, e.g. LAX"),
    trip_duration: Optional[str] = Query(None, alias="tripDuration", description="Trip length in days (default 7)"),
    settings: Settings = Depends(get_app_settings),
    service: PriceCalendarService = Depends(get_calendar_service),
) -> Dict[str, Any]:
    """
    Monthly price overview for a route.

    Samples the 1st and 15th of the current month and the 5 following ones
    (12 SerpApi searches, run in parallel) and returns per-month price bands,
    top airline, nonstop share and the 20 cheapest sampled trips.
    Results are cached for 6 hours.
    """
    if not origin or not destination:
        raise MissingParameterError("Missing required parameters: origin and destination")

    duration = parse_trip_duration(trip_duration, settings.DEFAULT_TRIP_DURATION)

    try:
        payload, cached = await service.get_calendar(origin, destination, duration)
    except FlightProxyError:
        raise
    except Exception as e:
        logger.error(f"Error building price calendar: {e}", exc_info=True)
        raise InternalError(str(e)) from e

    return with_cached_flag(payload, cached)


@router.get("/search", responses=ERROR_RESPONSES)
async def search_flights(
    origin: Optional[str] = Query(None, description="Origin airport code"),
    destination: Optional[str] = Query(None, description="Destination airport code"),
    departure_date: Optional[str] = Query(None, alias="departureDate", description="YYYY-MM-DD"),
    return_date: Optional[str] = Query(None, alias="returnDate", description="YYYY-MM-DD (default: departure + 7 days)"),
    service: FlightSearchService = Depends(get_search_service),
) -> Dict[str, Any]:
    """
    Round-trip offers for one departure date.

    Provider errors are passed through with the provider's status code.
    Successful results are cached for 1 hour.
    """
    if not origin or not destination or not departure_date:
        raise MissingParameterError(
            "Missing required parameters: origin, destination, and departureDate"
        )

    outbound = parse_iso_date(departure_date, "departureDate")
    inbound = parse_iso_date(return_date, "returnDate") if return_date else None

    try:
        payload, cached = await service.search(origin, destination, outbound, inbound)
    except FlightProxyError:
        raise
    except Exception as e:
        logger.error(f"Error searching flights: {e}", exc_info=True)
        raise InternalError(str(e)) from e

    return with_cached_flag(payload, cached)
