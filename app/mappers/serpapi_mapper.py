# app/mappers/serpapi_mapper.py
"""
SerpApi (Google Flights) Response Mapper

Converts raw google_flights payloads into our domain models
(FlightOffer, TripRecord, SearchOffer).

Every provider field is optional. The substitution rules are:
- airline missing      -> "Unknown" (calendar) / null (search)
- segments missing     -> 0 stops, null times
- total_duration 0/none -> null
- price missing or 0   -> entry skipped (calendar only)
- field of the wrong type -> treated as missing
"""

import logging
import math
from typing import Any, Iterable, List, Optional, Union

from pydantic import ValidationError

from schemas.flight_search import SearchOffer
from schemas.price_calendar import FlightOffer, TripRecord
from schemas.serpapi import ProviderFlight, ProviderResponse, ProviderSegment
from services.date_sampler import SampleQuery

logger = logging.getLogger(__name__)


def round_half_up(value: Union[int, float]) -> int:
    """Round to the nearest integer, .5 going up (548.5 -> 549, not banker's 548)."""
    return int(math.floor(value + 0.5))


class SerpApiMapper:
    """
    Maps google_flights responses to domain models.

    Google Flights format quirks:
    - ``best_flights`` is absent when Google has no "best" picks
    - ``other_flights`` can hold dozens of entries, the calendar reads only a few
    - segment times are local "YYYY-MM-DD HH:MM" strings without timezone
    """

    OTHER_FLIGHTS_LIMIT = 3
    UNKNOWN_AIRLINE = "Unknown"
    NONSTOP_CLASS = "Nonstop"

    @staticmethod
    def parse_flights(entries: Optional[Iterable[Any]]) -> List[ProviderFlight]:
        """Validate raw flight entries one by one, dropping the ones that aren't objects at all."""
        flights: List[ProviderFlight] = []
        for entry in entries or []:
            try:
                flights.append(ProviderFlight.model_validate(entry))
            except ValidationError as e:
                logger.debug("Skipping malformed flight entry: %s", e)
        return flights

    @staticmethod
    def calendar_candidates(response: ProviderResponse) -> List[ProviderFlight]:
        """All best flights, then the first few other flights for variety."""
        best = SerpApiMapper.parse_flights(response.best_flights)
        other = SerpApiMapper.parse_flights(
            (response.other_flights or [])[:SerpApiMapper.OTHER_FLIGHTS_LIMIT]
        )
        return best + other

    @staticmethod
    def search_candidates(response: ProviderResponse) -> List[ProviderFlight]:
        return SerpApiMapper.parse_flights(
            list(response.best_flights or []) + list(response.other_flights or [])
        )

    @staticmethod
    def _first_segment(flight: ProviderFlight) -> Optional[ProviderSegment]:
        return flight.flights[0] if flight.flights else None

    @staticmethod
    def _last_segment(flight: ProviderFlight) -> Optional[ProviderSegment]:
        return flight.flights[-1] if flight.flights else None

    @staticmethod
    def to_flight_offer(flight: ProviderFlight) -> Optional[FlightOffer]:
        """
        Reduce a provider flight to a FlightOffer.

        Returns:
            FlightOffer, or None when the entry has no usable price
        """
        if not flight.price:
            return None

        segments = flight.flights or []
        first = SerpApiMapper._first_segment(flight)
        last = SerpApiMapper._last_segment(flight)

        departure_time = first.departure_airport.time if first and first.departure_airport else None
        arrival_time = last.arrival_airport.time if last and last.arrival_airport else None

        return FlightOffer(
            price=round_half_up(flight.price),
            airline=(first.airline if first else None) or SerpApiMapper.UNKNOWN_AIRLINE,
            stops=max(len(segments) - 1, 0),
            departure_time=departure_time or None,
            arrival_time=arrival_time or None,
            total_duration=flight.total_duration or None,
        )

    @staticmethod
    def to_trip_record(offer: FlightOffer, flight: ProviderFlight, query: SampleQuery) -> TripRecord:
        return TripRecord(
            **offer.model_dump(),
            departure_date=query.outbound_date.isoformat(),
            return_date=query.return_date.isoformat(),
            duration=flight.total_duration,
        )

    @staticmethod
    def to_search_offer(flight: ProviderFlight) -> SearchOffer:
        """
        Flatten a provider flight for the single-date search.

        Stops are inferred from the first segment's travel class only: the
        value is 0 when it reads "Nonstop" and 1 otherwise.
        """
        first = SerpApiMapper._first_segment(flight)
        return SearchOffer(
            price=flight.price,
            airline=first.airline if first else None,
            stops=0 if first and first.travel_class == SerpApiMapper.NONSTOP_CLASS else 1,
            duration=flight.total_duration,
            departure_time=first.departure_airport.time if first and first.departure_airport else None,
            arrival_time=first.arrival_airport.time if first and first.arrival_airport else None,
            booking_link=flight.booking_token,
        )
