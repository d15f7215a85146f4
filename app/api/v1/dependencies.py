# app/api/v1/dependencies.py
"""
FastAPI dependencies

The collaborators (settings, services) are built once in ``create_app``
and parked on ``app.state``; routes reach them through these functions.
"""

from fastapi import Request

from app.core.config import Settings
from services.flight_search_service import FlightSearchService
from services.price_calendar_service import PriceCalendarService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_calendar_service(request: Request) -> PriceCalendarService:
    return request.app.state.calendar_service


def get_search_service(request: Request) -> FlightSearchService:
    return request.app.state.search_service
