# kerbside/routers/sensor_data.py
"""
Sensor cache management + upstream connectivity check.
GET /data/cache-status — records held and cache age
GET /data/refresh      — drop the cache and fetch again
GET /data/pull         — small direct request to the upstream feed, bypassing the cache
"""

import requests
from fastapi import APIRouter, Depends
from kerbside.config import settings
from kerbside.dependencies import get_sensor_cache
from kerbside.schemas.sensor_data import CacheRefreshOut, CacheStatusOut
from kerbside.services.sensor_cache import SensorCache
from kerbside.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/data/cache-status", response_model=CacheStatusOut, summary="Sensor cache status")
def cache_status(cache: SensorCache = Depends(get_sensor_cache)):
    return {"status": "success", "cache_info": cache.status()}


@router.get("/data/refresh", response_model=CacheRefreshOut,
            response_model_exclude_none=True, summary="Force a sensor cache refresh")
async def refresh_cache(cache: SensorCache = Depends(get_sensor_cache)):
    cache.force_refresh()
    snapshot = await cache.get()
    if snapshot is None:
        return {"status": "error", "message": "Failed to refresh"}
    return {"status": "success", "message": "Cache refreshed", "records": len(snapshot)}


@router.get("/data/pull", summary="Upstream sensor feed connectivity check")
def pull_sample():
    try:
        resp = requests.get(
            settings.SENSOR_FEED_URL,
            params={"limit": settings.SENSOR_PULL_LIMIT},
            timeout=settings.SENSOR_PULL_TIMEOUT_SECONDS,
        )
        if resp.status_code == 200:
            payload = resp.json()
            results = payload.get("results", []) if isinstance(payload, dict) else payload
            return {"status": "success", "message": "API connection working",
                    "sample_records": len(results)}
        return {"status": "error", "message": f"API returned status: {resp.status_code}"}
    except requests.exceptions.ConnectionError as e:
        logger.warning(f"Sensor feed unreachable: {e}")
        return {"status": "error", "message": f"Connection failed: {e}"}
    except (requests.exceptions.RequestException, ValueError) as e:
        return {"status": "error", "message": f"Connection failed: {e}"}
