"""
Shared fixtures: canned SerpApi payloads and a SerpApi client wired to an
in-process httpx.MockTransport, so no test touches the network.
"""

from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx
import pytest

from app.core.config import Settings
from app.infrastructure.cache import InMemoryCache
from services.serpapi_service import SerpApiService

TODAY = date(2026, 10, 19)


def make_flight(
    price: Any,
    airlines: Sequence[Optional[str]] = ("Delta",),
    *,
    travel_class: str = "Economy",
    total_duration: Optional[int] = 330,
    departure_time: str = "2026-11-01 08:00",
    arrival_time: str = "2026-11-01 11:30",
    booking_token: Optional[str] = "tok-123",
) -> Dict[str, Any]:
    """One google_flights entry; one segment per airline given."""
    segments = []
    for i, airline in enumerate(airlines):
        segment: Dict[str, Any] = {
            "travel_class": travel_class,
            "departure_airport": {"id": "JFK" if i == 0 else "DEN", "time": departure_time},
            "arrival_airport": {"id": "LAX", "time": arrival_time},
        }
        if airline is not None:
            segment["airline"] = airline
        segments.append(segment)

    flight: Dict[str, Any] = {"price": price, "flights": segments}
    if total_duration is not None:
        flight["total_duration"] = total_duration
    if booking_token is not None:
        flight["booking_token"] = booking_token
    return flight


def make_payload(best: List[Dict[str, Any]], other: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"search_metadata": {"status": "Success"}, "best_flights": best}
    if other is not None:
        payload["other_flights"] = other
    return payload


class RecordingHandler:
    """MockTransport handler that records every request and answers via ``respond``."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def params(self) -> List[Dict[str, str]]:
        return [dict(r.url.params) for r in self.requests]


@pytest.fixture
def make_serpapi():
    def factory(respond: Callable[[httpx.Request], httpx.Response], api_key: str = "test-key"):
        handler = RecordingHandler(respond)
        service = SerpApiService(api_key, transport=httpx.MockTransport(handler))
        return service, handler

    return factory


@pytest.fixture
def cache():
    return InMemoryCache(default_ttl=21600)


@pytest.fixture
def test_settings():
    return Settings(SERPAPI_KEY="test-key", LOG_JSON=False, LOG_LEVEL="WARNING")
