# services/price_summarizer.py
"""Turns aggregated month lists into the statistics the calendar returns."""

from collections import Counter
from typing import Dict, List

from app.mappers.serpapi_mapper import round_half_up
from schemas.price_calendar import MonthlyStats, TripRecord
from services.price_aggregator import MonthAccumulator

DEFAULT_TOP_AIRLINE = "Various"
CHEAPEST_TRIPS_LIMIT = 20


def top_airline(airlines: List[str]) -> str:
    """Most frequent airline; on a tie the one seen first wins."""
    if not airlines:
        return DEFAULT_TOP_AIRLINE
    # most_common keeps insertion order among equal counts
    return Counter(airlines).most_common(1)[0][0]


def summarize_month(acc: MonthAccumulator) -> MonthlyStats:
    if not acc.prices:
        return MonthlyStats(month=acc.month)

    nonstop = sum(1 for s in acc.stops if s == 0)
    return MonthlyStats(
        month=acc.month,
        avg_price=round_half_up(sum(acc.prices) / len(acc.prices)),
        min_price=min(acc.prices),
        max_price=max(acc.prices),
        flight_count=acc.flight_count,
        top_airline=top_airline(acc.airlines),
        nonstop_percent=round_half_up(nonstop / len(acc.stops) * 100),
        has_nonstop=nonstop > 0,
    )


def summarize_months(months: Dict[str, MonthAccumulator]) -> Dict[str, MonthlyStats]:
    return {name: summarize_month(acc) for name, acc in months.items()}


def cheapest_trips(trips: List[TripRecord], limit: int = CHEAPEST_TRIPS_LIMIT) -> List[TripRecord]:
    """Stable ascending sort by price, trimmed to ``limit``."""
    return sorted(trips, key=lambda t: t.price)[:limit]
