# kerbside/services/zone_filter_estimator.py
"""
Zone-filter strategy — the older of the two estimation algorithms.

Differences from the restriction-table strategy (estimator.py):
  - street lookup is a case-insensitive substring match, not an exact name
  - raw sign-plate rows are scanned, not one grouped restriction per zone
  - secondary time curve, 0.92/1.10 restriction factors, no 4P class
  - no complexity factor, confidence is only "high" or "medium"
Selected with ESTIMATION_STRATEGY=zone_filter.
"""

import re
from typing import Optional

import pandas as pd

from kerbside.config import settings
from kerbside.models.estimate import AvailabilityEstimate, Confidence, clamp_availability
from kerbside.services.estimator import time_based_availability
from kerbside.services.reference_store import (
    COL_DAYS, COL_DISPLAY, COL_FINISH, COL_START, COL_ZONE, PARKING_ZONES, SIGN_PLATES,
    WEEKDAY_PATTERN, find_zone_links_on_street,
)
from kerbside.services.restriction_matcher import is_weekday
from kerbside.utils.logger import get_logger
from kerbside.utils.street_matcher import NudgeTable
from kerbside.utils.time_parser import hour_to_minutes, parse_time_of_day
from kerbside.utils.values import normalize_id, text_or_none

logger = get_logger(__name__)

STRATEGY_ZONE_FILTER = "zone_filter"

ACTIVE_FACTOR = 0.92
INACTIVE_FACTOR = 1.10
TURNOVER_BONUS = {"1P": 1.15, "2P": 1.05}


def _turnover_bonus(display: Optional[str]) -> float:
    if not display:
        return 1.0
    for token, bonus in TURNOVER_BONUS.items():
        if token in display:
            return bonus
    return 1.0


def _plate_rows_for_zones(sign_plates: Optional[pd.DataFrame], zones: set[str]) -> pd.DataFrame:
    if sign_plates is None or sign_plates.empty or COL_ZONE not in sign_plates.columns:
        return pd.DataFrame()
    in_zones = sign_plates[COL_ZONE].map(lambda v: normalize_id(v) in zones)
    return sign_plates[in_zones]


def zone_filter_restriction_factor(plates: pd.DataFrame, hour: int, day_of_week: int) -> float:
    if plates.empty:
        return 1.0

    now = hour_to_minutes(hour)
    bonus = None
    if is_weekday(day_of_week):
        for _, row in plates.iterrows():
            days = text_or_none(row.get(COL_DAYS)) or ""
            if not re.search(WEEKDAY_PATTERN, days):
                continue
            start = parse_time_of_day(row.get(COL_START))
            end = parse_time_of_day(row.get(COL_FINISH))
            if start is None or end is None:
                continue
            if start <= now <= end:
                bonus = _turnover_bonus(text_or_none(row.get(COL_DISPLAY)))
                break

    if bonus is not None:
        return ACTIVE_FACTOR * bonus
    return INACTIVE_FACTOR


def estimate_zone_filtered(
    street: str, hour: int, day_of_week: int, datasets: dict[str, pd.DataFrame],
    nudges: Optional[NudgeTable] = None,
) -> AvailabilityEstimate:
    links = find_zone_links_on_street(datasets.get(PARKING_ZONES), street)
    if links.empty:
        return AvailabilityEstimate(
            availability_pct=time_based_availability(hour, day_of_week),
            confidence=Confidence.LOW,
            zones_analyzed=0,
            restriction_factor=1.0,
            strategy=STRATEGY_ZONE_FILTER,
        )

    zones = {z for z in (normalize_id(v) for v in links[COL_ZONE]) if z is not None}
    plates = _plate_rows_for_zones(datasets.get(SIGN_PLATES), zones)

    base = time_based_availability(hour, day_of_week)
    r_factor = zone_filter_restriction_factor(plates, hour, day_of_week)
    nudges = nudges or NudgeTable(settings.ZONE_FILTER_STREET_NUDGES)
    final = clamp_availability(base * r_factor * nudges.factor_for(street))

    logger.debug(f"[zone_filter] {street}: zones={len(zones)} plates={len(plates)} factor={r_factor:.3f}")
    return AvailabilityEstimate(
        availability_pct=round(final, 1),
        confidence=Confidence.HIGH if len(zones) >= 10 else Confidence.MEDIUM,
        zones_analyzed=len(zones),
        restriction_factor=r_factor,
        strategy=STRATEGY_ZONE_FILTER,
    )
