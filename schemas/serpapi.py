from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing import Any, List, Optional, Union


class ProviderModel(BaseModel):
    """
    SerpApi payloads carry many more fields than we read; those stay around
    untyped. The fields we do type fall back to None when the provider sends
    something of the wrong shape, so one odd value never costs us the offer.
    """
    model_config = ConfigDict(extra="allow")

    @field_validator("*", mode="wrap")
    @classmethod
    def _none_on_mismatch(cls, value: Any, handler):
        try:
            return handler(value)
        except ValidationError:
            return None


class ProviderAirport(ProviderModel):
    time: Optional[str] = Field(None, description="Local time, e.g. '2026-11-01 08:15'")


class ProviderSegment(ProviderModel):
    """
    One leg inside a Google Flights offer.
    A JFK -> LAX itinerary via DEN has two segments.
    """
    airline: Optional[str] = None
    travel_class: Optional[str] = None
    departure_airport: Optional[ProviderAirport] = None
    arrival_airport: Optional[ProviderAirport] = None


class ProviderFlight(ProviderModel):
    """One priced itinerary from ``best_flights`` or ``other_flights``."""
    price: Optional[Union[int, float]] = None
    flights: Optional[List[ProviderSegment]] = None
    total_duration: Optional[int] = Field(None, description="Total travel time in minutes")
    booking_token: Optional[str] = None


class ProviderResponse(ProviderModel):
    """
    Envelope of a google_flights search.

    Entries are kept raw here and validated one by one by the mapper, so a
    single odd offer cannot sink the whole response.
    """
    best_flights: List[Any] = Field(default_factory=list)
    other_flights: List[Any] = Field(default_factory=list)
    error: Optional[str] = None

    @field_validator("best_flights", "other_flights", mode="before")
    @classmethod
    def _list_or_empty(cls, value: Any) -> List[Any]:
        return value if isinstance(value, list) else []
