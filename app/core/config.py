from typing import List, Optional, Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # ============================================================
    # APPLICATION INFO
    # ============================================================
    PROJECT_NAME: str = "Budget Flight Finder API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False

    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # ============================================================
    # SERPAPI (GOOGLE FLIGHTS)
    # ============================================================
    SERPAPI_KEY: str = ""
    SERPAPI_BASE_URL: str = "https://serpapi.com"
    SERPAPI_SEARCH_PATH: str = "/search"
    SERPAPI_ENGINE: str = "google_flights"
    SERPAPI_CURRENCY: str = "USD"
    SERPAPI_LANGUAGE: str = "en"

    # None = no client-side timeout, wait for the transport
    UPSTREAM_TIMEOUT_S: Optional[float] = None

    # ============================================================
    # CACHE
    # ============================================================
    CACHE_TTL_CALENDAR: int = 21600  # 6 hours
    CACHE_TTL_SEARCH: int = 3600     # 1 hour

    # ============================================================
    # PRICE CALENDAR
    # ============================================================
    DEFAULT_TRIP_DURATION: int = 7
    CHEAPEST_TRIPS_LIMIT: int = 20

    # ============================================================
    # FRONTEND / CORS
    # ============================================================
    BACKEND_CORS_ORIGINS: List[str] = ["*"]

    # ============================================================
    # LOGGING
    # ============================================================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # ============================================================
    # PYDANTIC CONFIG
    # ============================================================
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


# ============================================================
# GLOBAL INSTANCE
# ============================================================
settings = Settings()
