# kerbside/routers/street.py
"""Street search — live sensor occupancy for a street, with a prediction for comparison."""

from fastapi import APIRouter, Depends
from kerbside.config import settings
from kerbside.dependencies import get_datasets, get_sensor_cache
from kerbside.services.sensor_cache import SensorCache
from kerbside.services.street_search import search_street
from kerbside.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/parking/street", summary="Real-time availability for a street")
async def parking_street(
    street: str = settings.DEFAULT_STREET,
    datasets: dict = Depends(get_datasets),
    cache: SensorCache = Depends(get_sensor_cache),
):
    """
    Matches the street against the bay inventory, then the zone links, and
    summarises the cached sensor readings for it.
    Always returns HTTP 200 with a status of success | partial_success | error.
    """
    try:
        return await search_street(street, datasets, cache)
    except Exception as e:
        logger.error(f"Street search error for '{street}': {e}", exc_info=True)
        return {"status": "error", "message": f"Enhanced search error: {e}"}
