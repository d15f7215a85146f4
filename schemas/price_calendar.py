from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional


class CamelModel(BaseModel):
    """Python field names in snake_case, JSON keys in camelCase for the frontend."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FlightOffer(CamelModel):
    """
    A priced itinerary reduced to the fields the price calendar cares about.
    ``stops`` is the number of connections (segments - 1, never negative).
    """
    model_config = ConfigDict(frozen=True)

    price: int = Field(..., description="Price in USD, rounded to a whole unit")
    airline: str = Field("Unknown", description="Carrier of the first segment")
    stops: int = Field(0, ge=0)
    departure_time: Optional[str] = Field(None, description="First segment departure time")
    arrival_time: Optional[str] = Field(None, description="Last segment arrival time")
    total_duration: Optional[int] = Field(None, description="Total travel time in minutes")


class TripRecord(FlightOffer):
    """A FlightOffer tied to the sampled outbound/return dates it was found for."""
    departure_date: str
    return_date: str
    duration: Optional[int] = None


class MonthlyStats(CamelModel):
    month: str
    avg_price: Optional[int] = None
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    flight_count: int = 0
    top_airline: Optional[str] = None
    nonstop_percent: Optional[int] = Field(None, ge=0, le=100)
    has_nonstop: Optional[bool] = None


class CalendarResult(CamelModel):
    origin: str
    destination: str
    trip_duration: int
    prices_by_month: Dict[str, MonthlyStats]
    cheapest_trips: List[TripRecord]
    currency: str = "USD"
    last_updated: str
    total_flights_found: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "origin": "JFK",
                "destination": "LAX",
                "tripDuration": 7,
                "pricesByMonth": {
                    "November": {
                        "month": "November",
                        "avgPrice": 312,
                        "minPrice": 198,
                        "maxPrice": 540,
                        "flightCount": 14,
                        "topAirline": "Delta",
                        "nonstopPercent": 57,
                        "hasNonstop": True,
                    }
                },
                "cheapestTrips": [
                    {
                        "price": 198,
                        "airline": "JetBlue",
                        "stops": 0,
                        "departureTime": "2026-11-15 06:00",
                        "arrivalTime": "2026-11-15 09:25",
                        "totalDuration": 385,
                        "departureDate": "2026-11-15",
                        "returnDate": "2026-11-22",
                        "duration": 385,
                    }
                ],
                "currency": "USD",
                "lastUpdated": "2026-10-19T12:00:00.000Z",
                "totalFlightsFound": 14,
            }
        }
    )
