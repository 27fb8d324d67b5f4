# kerbside/services/street_search.py
"""
Street search — live sensor occupancy for one street, cross-checked against the estimate.

Lookup order:
  1. parking_bays   bays with a kerbside sensor whose road segment mentions the street
                    → sensors matched by kerbside ID
  2. parking_zones  zone links whose street name contains the query
                    → sensors matched by zone number
  3. neither        prediction-only answer with similar street names

Status values: success | partial_success | error
"""

from datetime import datetime
from typing import Optional

import pandas as pd
from fastapi.concurrency import run_in_threadpool

from kerbside.config import settings
from kerbside.models.sensor import STATUS_OCCUPIED, STATUS_PRESENT, STATUS_UNOCCUPIED, SensorRecord
from kerbside.services.fallback_chain import predict
from kerbside.services.reference_store import (
    COL_KERBSIDE_ID, COL_ZONE, PARKING_BAYS, PARKING_ZONES,
    find_bays_on_street, find_zone_links_on_street, known_street_names,
)
from kerbside.services.sensor_cache import SensorCache
from kerbside.utils.logger import get_logger
from kerbside.utils.street_matcher import StreetMatcher
from kerbside.utils.values import normalize_id

logger = get_logger(__name__)

SOURCE_BAYS = "parking_bays"
SOURCE_ZONES = "parking_zones"
MAX_SUGGESTIONS = 5


def similar_streets(street: str, datasets: dict[str, pd.DataFrame]) -> list[str]:
    """Known street names sharing any word with the query, else the default list."""
    matcher = StreetMatcher(street.split())
    similar = [name for name in known_street_names(datasets) if matcher.matches(name)]
    return similar[:MAX_SUGGESTIONS] if similar else list(settings.SUGGESTED_STREETS)


def coverage_confidence(coverage_pct: float) -> str:
    if coverage_pct > 10:
        return "High"
    if coverage_pct > 2:
        return "Medium"
    return "Low"


def _locate_street(street: str, datasets: dict[str, pd.DataFrame]) -> tuple[Optional[str], set[str], int]:
    """Returns (source, target IDs, number of mapped spots)."""
    bays = find_bays_on_street(datasets.get(PARKING_BAYS), street)
    if not bays.empty:
        ids = {i for i in (normalize_id(v) for v in bays[COL_KERBSIDE_ID]) if i is not None}
        return SOURCE_BAYS, ids, len(bays)

    links = find_zone_links_on_street(datasets.get(PARKING_ZONES), street)
    if not links.empty:
        zones = {z for z in (normalize_id(v) for v in links[COL_ZONE]) if z is not None}
        return SOURCE_ZONES, zones, len(links)

    return None, set(), 0


def _sensors_for(records: tuple[SensorRecord, ...], source: str, targets: set[str]) -> list[SensorRecord]:
    if source == SOURCE_BAYS:
        return [r for r in records if r.kerbside_id in targets]
    return [r for r in records if r.zone_number in targets]


async def search_street(
    street: str,
    datasets: dict[str, pd.DataFrame],
    sensor_cache: SensorCache,
    now: Optional[datetime] = None,
) -> dict:
    now = now or datetime.now()
    source, targets, total_spots = _locate_street(street, datasets)

    if source is None:
        logger.info(f"[SEARCH] '{street}' not found in bay inventory or zone links")
        return {
            "status": "partial_success",
            "street_searched": street,
            "message": "Street recognized but no real-time sensor data available",
            "prediction_available": True,
            "suggested_action": "Use /api/predict/now for availability prediction",
            "current_prediction": {
                "availability_percentage": await run_in_threadpool(predict, street, 14, 1, datasets),
                "note": "Based on historical patterns and restriction data",
            },
            "data_sources_checked": [SOURCE_BAYS, SOURCE_ZONES],
            "suggestions": similar_streets(street, datasets),
        }

    snapshot = await sensor_cache.get()
    if snapshot is None:
        return {"status": "error", "message": "Sensor data unavailable"}

    sensors = _sensors_for(snapshot.records, source, targets)
    coverage_pct = round(len(sensors) / total_spots * 100, 1)
    # pandas work; runs in the threadpool so the event loop stays free
    current_prediction = await run_in_threadpool(predict, street, now.hour, now.isoweekday(), datasets)
    logger.info(f"[SEARCH] '{street}' via {source}: {total_spots} spots, {len(sensors)} sensors reporting")

    if not sensors:
        return {
            "status": "partial_success",
            "street_searched": street,
            "message": "Street found but no real-time sensors available in current data sample",
            "total_spots_mapped": total_spots,
            "data_source": source,
            "alternative_prediction": {
                "predicted_availability": current_prediction,
                "note": "Based on historical patterns and restrictions",
                "suggestion": "Use /api/predict/now for detailed prediction",
            },
        }

    available = sum(1 for r in sensors if r.status == STATUS_UNOCCUPIED)
    occupied = sum(1 for r in sensors if r.status == STATUS_OCCUPIED)
    present = sum(1 for r in sensors if r.status == STATUS_PRESENT)
    real_time_pct = round(available / len(sensors) * 100, 1)

    response = {
        "status": "success",
        "street_searched": street,
        "summary": {
            "spots_available_for_parking": available,
            "spots_unavailable_occupied": occupied + present,
            "availability_percentage": real_time_pct,
        },
        "data_quality": {
            "total_spots_on_street": total_spots,
            "sensors_reporting": len(sensors),
            "coverage_percentage": coverage_pct,
            "cache_size": len(snapshot),
            "confidence_level": coverage_confidence(coverage_pct),
            "data_source": source,
        },
        "prediction_comparison": {
            "current_real_time": real_time_pct,
            "current_prediction": current_prediction,
            "note": "Real-time vs predicted availability",
        },
    }
    if available:
        response["available_spots"] = [r.to_spot() for r in sensors if r.is_available]
    return response
