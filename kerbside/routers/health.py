# kerbside/routers/health.py
"""
Liveness + health endpoints.
Health reports which reference datasets are loaded and the sensor cache state.
"""

from datetime import datetime
from fastapi import APIRouter, Depends
from kerbside.dependencies import get_datasets, get_sensor_cache
from kerbside.services.fallback_chain import has_reference_tables
from kerbside.services.sensor_cache import SensorCache

router = APIRouter()

API_VERSION = "3.0.0"


@router.get("/test", summary="Liveness check")
def test():
    return {
        "message": "Melbourne Parking API",
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "status": "success",
        "version": API_VERSION,
    }


@router.get("/api/health", summary="System health check")
def health_check(datasets: dict = Depends(get_datasets), cache: SensorCache = Depends(get_sensor_cache)):
    """
    Returns:
    - Reference datasets loaded (record counts)
    - Whether the restriction-aware estimate is available
    - Sensor cache state
    """
    return {
        "status": "ok" if has_reference_tables(datasets) else "degraded",
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "datasets": {name: len(df) for name, df in datasets.items()},
        "restriction_model": "available" if has_reference_tables(datasets) else "time_curve_only",
        "sensor_cache": cache.status(),
    }
