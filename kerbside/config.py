# kerbside/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

import os
from pydantic_settings import BaseSettings

_ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class Settings(BaseSettings):
    # ── Reference data (CSV) ──────────────────────────────────────────────
    DATA_DIR: str = os.path.join(_ROOT_DIR, "data")
    PARKING_BAYS_FILE: str = "on-street-parking-bays.csv"
    SIGN_PLATES_FILE: str = "sign-plates-located-in-each-parking-zone.csv"
    PARKING_ZONES_FILE: str = "parking-zones-linked-to-street-segments.csv"

    # ── Live sensor feed ──────────────────────────────────────────────────
    SENSOR_FEED_URL: str = (
        "https://data.melbourne.vic.gov.au/api/explore/v2.1/catalog/datasets/"
        "on-street-parking-bay-sensors/records"
    )
    SENSOR_FEED_LIMIT: int = 100
    SENSOR_FEED_TIMEOUT_SECONDS: float = 20.0
    SENSOR_CACHE_TTL_SECONDS: float = 180.0      # 3 minutes, one slot for the whole feed
    SENSOR_PULL_LIMIT: int = 5                   # /api/data/pull connectivity probe
    SENSOR_PULL_TIMEOUT_SECONDS: float = 15.0

    # ── Estimation ────────────────────────────────────────────────────────
    ESTIMATION_STRATEGY: str = "restriction_table"   # restriction_table | zone_filter
    DEFAULT_STREET: str = "Collins Street"
    FLAGSHIP_STREETS: list[str] = ["Collins"]

    # Street-name nudges, first match wins (insertion order)
    BASIC_STREET_NUDGES: dict[str, float] = {
        "Collins": 0.90,
        "Bourke": 0.90,
        "Queen": 0.95,
        "Elizabeth": 0.95,
    }
    ZONE_FILTER_STREET_NUDGES: dict[str, float] = {
        "Collins": 0.90,
        "Bourke": 0.95,
    }
    EMERGENCY_STREET_NUDGES: dict[str, float] = {
        "Collins": 0.90,
    }
    SUGGESTED_STREETS: list[str] = [
        "Spencer Street", "William Street", "Queen Street", "Collins Street", "Elizabeth Street",
    ]

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    PORT: int = 8000

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = os.path.join(_ROOT_DIR, "logs")
    LOG_FILE: str = "kerbside.log"

    @property
    def DATASET_FILES(self) -> dict:
        return {
            "parking_bays": self.PARKING_BAYS_FILE,
            "sign_plates": self.SIGN_PLATES_FILE,
            "parking_zones": self.PARKING_ZONES_FILE,
        }

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
