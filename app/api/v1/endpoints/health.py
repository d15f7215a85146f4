# app/api/v1/endpoints/health.py
from fastapi import APIRouter

from schemas.common import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check, no upstream call."""
    return HealthResponse(
        status="ok",
        message="Budget Flight Finder API is running",
        api="SerpApi (Google Flights)",
        freeSearches="100/month",
    )
