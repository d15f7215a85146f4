# services/flight_search_service.py
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, Optional, Tuple

from app.core.metrics import CACHE_HITS, CACHE_MISSES
from app.core.timeutils import utc_timestamp
from app.infrastructure.cache import CacheAdapter
from app.mappers.serpapi_mapper import SerpApiMapper
from schemas.flight_search import SearchResult
from services.exceptions import UpstreamError
from services.serpapi_service import SerpApiService

logger = logging.getLogger(__name__)

TTL_SEARCH = 3600  # 1 hour
DEFAULT_STAY_DAYS = 7


def search_cache_key(origin: str, destination: str, departure_date: str, return_date: Optional[str]) -> str:
    return f"search_{origin}_{destination}_{departure_date}_{return_date or 'oneway'}"


class FlightSearchService:
    """Single-date round-trip search proxied to SerpApi."""

    def __init__(self, serpapi: SerpApiService, cache: CacheAdapter, *, ttl: int = TTL_SEARCH) -> None:
        self.serpapi = serpapi
        self.cache = cache
        self.ttl = ttl

    async def search(
        self,
        origin: str,
        destination: str,
        departure_date: date,
        return_date: Optional[date] = None,
    ) -> Tuple[Dict[str, Any], bool]:
        """
        Return the search payload and whether it came from the cache.

        Without a return date the trip defaults to a one-week stay; the cache
        key still records that none was given.

        Raises:
            ConfigurationError: cache miss and no SerpApi key configured
            UpstreamError: the provider call failed (nothing is cached)
        """
        cache_key = search_cache_key(
            origin,
            destination,
            departure_date.isoformat(),
            return_date.isoformat() if return_date else None,
        )

        cached = await self.cache.get(cache_key)
        if cached is not None:
            CACHE_HITS.labels("search").inc()
            return cached, True

        CACHE_MISSES.labels("search").inc()
        self.serpapi.ensure_configured()

        logger.info("Searching flights: %s -> %s on %s", origin, destination, departure_date)

        return_date = return_date or departure_date + timedelta(days=DEFAULT_STAY_DAYS)
        try:
            response = await self.serpapi.search(
                origin=origin,
                destination=destination,
                outbound_date=departure_date.isoformat(),
                return_date=return_date.isoformat(),
            )
        except UpstreamError as e:
            logger.error("SerpApi search failed (%s): %s", e.status_code, e.message)
            raise UpstreamError(e.message, status_code=e.status_code, error="Flight Search Error") from e

        result = SearchResult(
            offers=[SerpApiMapper.to_search_offer(f) for f in SerpApiMapper.search_candidates(response)],
            last_updated=utc_timestamp(),
        )
        payload = result.model_dump(mode="json", by_alias=True)
        await self.cache.set(cache_key, payload, ttl=self.ttl)
        return payload, False
