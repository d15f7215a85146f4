import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from app.core.config import Settings, settings as default_settings
from app.core.logging_config import setup_logging
from app.infrastructure.cache import CacheAdapter, InMemoryCache
from app.api.v1.endpoints import flights, health
from services.exceptions import FlightProxyError, InternalError
from services.flight_search_service import FlightSearchService
from services.price_calendar_service import PriceCalendarService
from services.serpapi_service import SerpApiService

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[CacheAdapter] = None,
    serpapi: Optional[SerpApiService] = None,
) -> FastAPI:
    """
    Build the API with its collaborators.

    One cache and one SerpApi client per app; both are shared by every
    request through ``app.state``.
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    cache = cache or InMemoryCache(default_ttl=settings.CACHE_TTL_CALENDAR)
    serpapi = serpapi or SerpApiService.from_settings(settings)

    # ============================================================
    # LIFESPAN
    # ============================================================
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "🚀 %s running on port %s (%s), using SerpApi (Google Flights)",
            settings.PROJECT_NAME,
            settings.PORT,
            settings.ENVIRONMENT,
        )
        if serpapi.is_configured:
            logger.info("✅ SerpApi key configured")
        else:
            logger.warning(
                "⚠️  SerpApi key not found! Set SERPAPI_KEY in the environment or .env file; "
                "flight endpoints will answer 500 until it is configured."
            )
        yield
        await serpapi.close()

    # ============================================================
    # FASTAPI APP SETUP
    # ============================================================
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="""
        ✈️ **Budget Flight Finder API**

        Thin proxy over SerpApi Google Flights that keeps the API key on the
        server, caches results and reshapes them for the frontend.

        ## Features
        * 📅 6-month price calendar with monthly price bands
        * 💰 Cheapest sampled trips
        * 🔍 Single-date round-trip search
        """,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.cache = cache
    app.state.serpapi = serpapi
    app.state.calendar_service = PriceCalendarService(
        serpapi,
        cache,
        ttl=settings.CACHE_TTL_CALENDAR,
        cheapest_limit=settings.CHEAPEST_TRIPS_LIMIT,
    )
    app.state.search_service = FlightSearchService(serpapi, cache, ttl=settings.CACHE_TTL_SEARCH)

    # ============================================================
    # CORS CONFIG
    # ============================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ============================================================
    # ERROR HANDLERS
    # ============================================================
    @app.exception_handler(FlightProxyError)
    async def flight_proxy_error_handler(request: Request, exc: FlightProxyError):
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
        err = InternalError("Something went wrong!")
        return JSONResponse(err.to_dict(), status_code=err.status_code)

    # ============================================================
    # API ROUTERS
    # ============================================================
    app.include_router(health.router, prefix=settings.API_PREFIX, tags=["health"])
    app.include_router(flights.router, prefix=f"{settings.API_PREFIX}/flights", tags=["flights"])

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)
