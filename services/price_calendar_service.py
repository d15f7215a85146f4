# services/price_calendar_service.py
"""
Price calendar: six months of sampled round-trip prices for one route.

Cache -> sampling grid -> 12 concurrent SerpApi calls -> aggregation ->
per-month statistics -> cache.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Any, Callable, Dict, Optional, Set, Tuple

from app.core.metrics import CACHE_HITS, CACHE_MISSES
from app.core.timeutils import utc_timestamp
from app.infrastructure.cache import CacheAdapter
from schemas.price_calendar import CalendarResult
from services.date_sampler import build_sampling_grid, sampled_months
from services.price_aggregator import PriceAggregator
from services.price_summarizer import CHEAPEST_TRIPS_LIMIT, cheapest_trips, summarize_months
from services.serpapi_service import SerpApiService

logger = logging.getLogger(__name__)

TTL_CALENDAR = 21600  # 6 hours


def calendar_cache_key(origin: str, destination: str, trip_duration: int) -> str:
    return f"calendar_{origin}_{destination}_{trip_duration}d"


class PriceCalendarService:
    """Builds (or serves from cache) the monthly price overview for a route."""

    def __init__(
        self,
        serpapi: SerpApiService,
        cache: CacheAdapter,
        *,
        ttl: int = TTL_CALENDAR,
        cheapest_limit: int = CHEAPEST_TRIPS_LIMIT,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.serpapi = serpapi
        self.cache = cache
        self.ttl = ttl
        self.cheapest_limit = cheapest_limit
        self._today = today
        self._inflight: Set[asyncio.Task] = set()

    async def get_calendar(
        self, origin: str, destination: str, trip_duration: int
    ) -> Tuple[Dict[str, Any], bool]:
        """
        Return the calendar payload and whether it came from the cache.

        The payload is the JSON-ready dict (camelCase keys) that is also
        stored in the cache, so cached and fresh bodies are identical.

        Raises:
            ConfigurationError: cache miss and no SerpApi key configured
        """
        cache_key = calendar_cache_key(origin, destination, trip_duration)

        cached = await self.cache.get(cache_key)
        if cached is not None:
            CACHE_HITS.labels("calendar").inc()
            logger.info("Returning cached calendar %s", cache_key)
            return cached, True

        CACHE_MISSES.labels("calendar").inc()
        self.serpapi.ensure_configured()

        logger.info(
            "Fetching flight prices: %s -> %s (%d days)", origin, destination, trip_duration,
        )

        # The build runs in its own task: if the client goes away, the
        # upstream calls still finish and the result still lands in the cache.
        task = asyncio.create_task(self._build_and_store(cache_key, origin, destination, trip_duration))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

        payload = await asyncio.shield(task)
        return payload, False

    async def _build_and_store(
        self, cache_key: str, origin: str, destination: str, trip_duration: int
    ) -> Dict[str, Any]:
        result = await self.build_calendar(origin, destination, trip_duration)
        payload = result.model_dump(mode="json", by_alias=True)
        await self.cache.set(cache_key, payload, ttl=self.ttl)
        return payload

    async def build_calendar(
        self, origin: str, destination: str, trip_duration: int, today: Optional[date] = None
    ) -> CalendarResult:
        today = today or self._today()
        queries = build_sampling_grid(origin, destination, trip_duration, today=today)

        results = await self.serpapi.search_grid(queries)

        aggregator = PriceAggregator(sampled_months(today)).fold(results)
        cheapest = cheapest_trips(aggregator.trips, self.cheapest_limit)

        logger.info(
            "Cheapest trip found: %s",
            f"${cheapest[0].price}" if cheapest else "N/A",
            extra={"extra": {
                "origin": origin,
                "destination": destination,
                "total_flights": aggregator.total_flights,
            }},
        )

        return CalendarResult(
            origin=origin,
            destination=destination,
            trip_duration=trip_duration,
            prices_by_month=summarize_months(aggregator.months),
            cheapest_trips=cheapest,
            currency=self.serpapi.currency,
            last_updated=utc_timestamp(),
            total_flights_found=aggregator.total_flights,
        )
