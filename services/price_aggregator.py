# services/price_aggregator.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from app.mappers.serpapi_mapper import SerpApiMapper
from schemas.price_calendar import FlightOffer, TripRecord
from services.serpapi_service import SampleResult

logger = logging.getLogger(__name__)


@dataclass
class MonthAccumulator:
    """Running per-month lists, only alive until the summarizer finalizes them."""
    month: str
    prices: List[int] = field(default_factory=list)
    airlines: List[str] = field(default_factory=list)
    stops: List[int] = field(default_factory=list)

    @property
    def flight_count(self) -> int:
        return len(self.prices)

    def add(self, offer: FlightOffer) -> None:
        self.prices.append(offer.price)
        self.airlines.append(offer.airline)
        self.stops.append(offer.stops)


class PriceAggregator:
    """
    Folds grid search results into per-month accumulators and a global trip list.

    Months are fixed at construction so every sampled month shows up in the
    output, even when none of its searches produced a flight. Results are
    filed under their query's month label.
    """

    def __init__(self, months: Iterable[str]):
        self.months: Dict[str, MonthAccumulator] = {m: MonthAccumulator(m) for m in months}
        self.trips: List[TripRecord] = []

    @property
    def total_flights(self) -> int:
        return len(self.trips)

    def add_result(self, result: SampleResult) -> int:
        """Fold one search result; failed searches contribute nothing. Returns flights added."""
        if not result.success or result.data is None:
            return 0

        bucket = self.months[result.query.month_name]
        added = 0
        for flight in SerpApiMapper.calendar_candidates(result.data):
            offer = SerpApiMapper.to_flight_offer(flight)
            if offer is None:
                continue
            bucket.add(offer)
            self.trips.append(SerpApiMapper.to_trip_record(offer, flight, result.query))
            added += 1
        return added

    def fold(self, results: Iterable[SampleResult]) -> "PriceAggregator":
        for result in results:
            self.add_result(result)
        logger.info(
            "Found %d total flights across %d months", self.total_flights, len(self.months),
        )
        return self
