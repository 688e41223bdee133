from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from typing import List, Optional

load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./trip_planner.db"
    DATABASE_ECHO: bool = False

    # Redis is optional, place lookups are cached only when it is set
    REDIS_URL: Optional[str] = None

    # Google Places
    GOOGLE_PLACES_API_KEY: str = ""
    GOOGLE_PLACES_BASE_URL: str = "https://maps.googleapis.com/maps/api"
    PLACE_LOOKUP_TIMEOUT_SECONDS: float = 5.0
    PLACE_CACHE_TTL_SECONDS: int = 3600
    PLACE_PHOTO_MAX_WIDTH: int = 400

    # The shared trip every client edits
    DEFAULT_TRIP_ID: int = 1
    DEFAULT_TRIP_TITLE: str = "Our Hawaiian Dream Vacation"
    DEFAULT_TRIP_DATES: str = "Dec 15-22, 2024"
    DEFAULT_TRIP_ISLANDS: str = "Oahu"

    CORS_ORIGINS: List[str] = ["*"]

    PROJECT_NAME: str = "Trip Sync API"
    PROJECT_VERSION: str = "1.0.0"
    PROJECT_DESCRIPTION: str = "Real-time collaborative trip itinerary planner"

    class Config:
        env_file = ".env"


settings = Settings()
