# services/serpapi_service.py
"""
SerpApi Google Flights client

Features:
- Single round-trip search (used by /api/flights/search)
- Concurrent batch search over a sampling grid (used by the price calendar)

Design:
- Uses BaseAPIService for the shared httpx client
- One attempt per call; failures are reported, never retried
- In a batch every call is independent: one failure never cancels the others
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from app.core.config import Settings
from app.core.metrics import UPSTREAM_LATENCY, UPSTREAM_REQUESTS
from schemas.serpapi import ProviderResponse
from services.base_api_service import BaseAPIService
from services.date_sampler import SampleQuery
from services.exceptions import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class SampleResult:
    """Outcome of one grid search: the parsed response, or a failure marker."""
    query: SampleQuery
    success: bool
    data: Optional[ProviderResponse] = None


class SerpApiService(BaseAPIService):
    """SerpApi client for the google_flights engine."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = "https://serpapi.com",
        search_path: str = "/search",
        engine: str = "google_flights",
        currency: str = "USD",
        language: str = "en",
        timeout_s: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        super().__init__(base_url, timeout_s=timeout_s, transport=transport)
        self.api_key = api_key
        self.search_path = search_path
        self.engine = engine
        self.currency = currency
        self.language = language

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "SerpApiService":
        return cls(
            settings.SERPAPI_KEY,
            base_url=settings.SERPAPI_BASE_URL,
            search_path=settings.SERPAPI_SEARCH_PATH,
            engine=settings.SERPAPI_ENGINE,
            currency=settings.SERPAPI_CURRENCY,
            language=settings.SERPAPI_LANGUAGE,
            timeout_s=settings.UPSTREAM_TIMEOUT_S,
            **kwargs,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def ensure_configured(self) -> None:
        if not self.is_configured:
            raise ConfigurationError("Please add your SerpApi key (SERPAPI_KEY) to the environment or .env file")

    # ---------- Public API ----------

    async def search(
        self,
        *,
        origin: str,
        destination: str,
        outbound_date: str,
        return_date: str,
    ) -> ProviderResponse:
        """
        Run one google_flights round-trip search.

        Raises:
            UpstreamError: provider error status (status code and message kept),
                transport failure or an unreadable body
        """
        params = {
            "engine": self.engine,
            "departure_id": origin,
            "arrival_id": destination,
            "outbound_date": outbound_date,
            "return_date": return_date,
            "currency": self.currency,
            "hl": self.language,
            "api_key": self.api_key,
        }

        start = time.perf_counter()
        try:
            data = await self._get(self.search_path, params=params)
            response = ProviderResponse.model_validate(data)
        except httpx.HTTPStatusError as e:
            UPSTREAM_REQUESTS.labels("http_error").inc()
            raise UpstreamError(
                _provider_message(e.response) or str(e),
                status_code=e.response.status_code,
            ) from e
        except httpx.TransportError as e:
            UPSTREAM_REQUESTS.labels("transport_error").inc()
            raise UpstreamError(f"SerpApi request failed: {e}") from e
        except (ValueError, ValidationError) as e:
            UPSTREAM_REQUESTS.labels("malformed").inc()
            raise UpstreamError(f"SerpApi returned an unreadable response: {e}") from e
        finally:
            UPSTREAM_LATENCY.observe(time.perf_counter() - start)

        UPSTREAM_REQUESTS.labels("ok").inc()
        return response

    async def search_sample(self, query: SampleQuery) -> SampleResult:
        """Search one grid point, turning any upstream failure into a failure marker."""
        outbound = query.outbound_date.isoformat()
        try:
            data = await self.search(
                origin=query.origin,
                destination=query.destination,
                outbound_date=outbound,
                return_date=query.return_date.isoformat(),
            )
        except UpstreamError as e:
            logger.warning(
                "Error fetching flights for %s: %s", outbound, e.message,
                extra={"extra": {"outbound_date": outbound, "status": e.status_code}},
            )
            return SampleResult(query=query, success=False)

        logger.info(
            "Got data for %s: %d best flights", outbound, len(data.best_flights or []),
        )
        return SampleResult(query=query, success=True, data=data)

    async def search_grid(self, queries: List[SampleQuery]) -> List[SampleResult]:
        """
        Search every grid point concurrently and wait for all of them.

        Returns:
            One SampleResult per query, in query order
        """
        logger.info("Making %d API calls to SerpApi...", len(queries))
        outcomes = await asyncio.gather(
            *(self.search_sample(q) for q in queries),
            return_exceptions=True,
        )

        results: List[SampleResult] = []
        for query, outcome in zip(queries, outcomes):
            if isinstance(outcome, Exception):
                logger.error("Search task for %s raised: %s", query.outbound_date, outcome)
                results.append(SampleResult(query=query, success=False))
            else:
                results.append(outcome)

        successful = sum(1 for r in results if r.success)
        logger.info("API calls: %d/%d successful", successful, len(results))
        return results


def _provider_message(response: httpx.Response) -> Optional[str]:
    try:
        body: Dict[str, Any] = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None
