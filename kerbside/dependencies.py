# kerbside/dependencies.py
"""
Shared request dependencies.
The sensor cache is one process-wide instance; reference tables are re-read for
every request so that dropping new CSVs into DATA_DIR needs no restart.
"""

from kerbside.config import settings
from kerbside.services.reference_store import load_datasets
from kerbside.services.sensor_cache import SensorCache
from kerbside.services.sensor_feed import SensorFeedClient

sensor_cache = SensorCache(
    fetcher=SensorFeedClient().fetch,
    ttl_seconds=settings.SENSOR_CACHE_TTL_SECONDS,
)


def get_sensor_cache() -> SensorCache:
    """FastAPI dependency — the process-wide sensor cache."""
    return sensor_cache


def get_datasets() -> dict:
    """FastAPI dependency — reference tables for this request (missing files are absent keys)."""
    return load_datasets()
