# kerbside/services/estimator.py
"""
Availability Estimator — restriction-table strategy.

    availability = clamp(base_curve × restriction_factor × complexity_factor, 5, 95)

base_curve          fixed weekday/weekend step function over hour of day
restriction_factor  1.0 without restriction data, 0.95 × turnover while a
                    restriction is enforced, 1.15 outside enforced hours
complexity_factor   streets spanning many zones are discounted slightly

Streets with no zone mapping get estimate_basic(): the base curve with a
street-name nudge and "low" confidence.

time_based_availability() is the secondary curve used when the reference
tables are missing. It is deliberately not the same table as base_availability().
"""

from typing import Optional

import pandas as pd

from kerbside.config import settings
from kerbside.models.estimate import AvailabilityEstimate, Confidence, clamp_availability
from kerbside.models.zone import ZoneRestriction
from kerbside.services.reference_store import PARKING_ZONES, SIGN_PLATES, build_street_zone_mapping
from kerbside.services.restriction_matcher import is_restriction_active, turnover_factor
from kerbside.utils.logger import get_logger
from kerbside.utils.street_matcher import NudgeTable, StreetMatcher

logger = get_logger(__name__)

STRATEGY_RESTRICTION_TABLE = "restriction_table"
STRATEGY_BASIC = "basic"

ACTIVE_RESTRICTION_FACTOR = 0.95
INACTIVE_RESTRICTION_FACTOR = 1.15

# (hours, availability %); the first bucket containing the hour wins
_WEEKDAY_CURVE = (
    (range(5, 7), 85),
    (range(7, 9), 20),
    (range(9, 11), 15),
    (range(11, 12), 25),
    (range(12, 14), 22),
    (range(14, 17), 28),
    (range(17, 20), 18),
    (range(20, 22), 45),
    (range(22, 24), 65),
)
_WEEKDAY_NIGHT = 88

_WEEKEND_CURVE = (
    (range(6, 9), 70),
    (range(9, 12), 55),
    (range(12, 18), 35),
    (range(18, 22), 40),
    (range(22, 24), 65),
)
_WEEKEND_NIGHT = 85

# Secondary curve for the no-reference-data path
_TIME_BASED_WEEKDAY = (
    (range(7, 9), 18),
    (range(9, 11), 12),
    (range(11, 14), 20),
    (range(14, 17), 25),
    (range(17, 20), 15),
    (range(20, 23), 42),
)
_TIME_BASED_WEEKDAY_NIGHT = 85

_TIME_BASED_WEEKEND = (
    (range(6, 9), 65),
    (range(9, 12), 50),
    (range(12, 18), 32),
    (range(18, 22), 38),
)
_TIME_BASED_WEEKEND_NIGHT = 80


def is_weekend(day_of_week: int) -> bool:
    return day_of_week in (6, 7)


def _lookup(curve, default: float, hour: int) -> float:
    hour = int(hour)
    for hours, value in curve:
        if hour in hours:
            return float(value)
    return float(default)


def base_availability(hour: int, day_of_week: int) -> float:
    if is_weekend(day_of_week):
        return _lookup(_WEEKEND_CURVE, _WEEKEND_NIGHT, hour)
    return _lookup(_WEEKDAY_CURVE, _WEEKDAY_NIGHT, hour)


def time_based_availability(hour: int, day_of_week: int) -> float:
    if is_weekend(day_of_week):
        return _lookup(_TIME_BASED_WEEKEND, _TIME_BASED_WEEKEND_NIGHT, hour)
    return _lookup(_TIME_BASED_WEEKDAY, _TIME_BASED_WEEKDAY_NIGHT, hour)


def restriction_factor(restrictions: list[ZoneRestriction], hour: int, day_of_week: int) -> float:
    if not restrictions:
        return 1.0
    match = is_restriction_active(restrictions, hour, day_of_week)
    if match.active:
        return ACTIVE_RESTRICTION_FACTOR * turnover_factor(match.limit_class)
    return INACTIVE_RESTRICTION_FACTOR


def complexity_factor(zone_count: int) -> float:
    if zone_count >= 20:
        return 0.95
    if zone_count >= 10:
        return 0.98
    return 1.0


def determine_confidence(street: str, zone_count: int, flagship: Optional[StreetMatcher] = None) -> Confidence:
    flagship = flagship or StreetMatcher(settings.FLAGSHIP_STREETS)
    if flagship.matches(street):
        return Confidence.VERY_HIGH
    if zone_count >= 10:
        return Confidence.HIGH
    if zone_count >= 5:
        return Confidence.MEDIUM
    return Confidence.LOW


def estimate_basic(street: str, hour: int, day_of_week: int, nudges: Optional[NudgeTable] = None) -> AvailabilityEstimate:
    """Unknown-street fallback: base curve and a street-name nudge only."""
    nudges = nudges or NudgeTable(settings.BASIC_STREET_NUDGES)
    value = base_availability(hour, day_of_week) * nudges.factor_for(street)
    return AvailabilityEstimate(
        availability_pct=round(clamp_availability(value), 1),
        confidence=Confidence.LOW,
        zones_analyzed=0,
        restriction_factor=1.0,
        strategy=STRATEGY_BASIC,
    )


def estimate(street: str, hour: int, day_of_week: int, datasets: dict[str, pd.DataFrame]) -> AvailabilityEstimate:
    """Restriction-aware estimate for one street, hour (0–23) and ISO weekday (1–7)."""
    mapping = build_street_zone_mapping(datasets.get(PARKING_ZONES), datasets.get(SIGN_PLATES))
    street_data = mapping.get(street)
    if street_data is None:
        logger.debug(f"No zone mapping for '{street}' — using basic estimate")
        return estimate_basic(street, hour, day_of_week)

    base = base_availability(hour, day_of_week)
    r_factor = restriction_factor(street_data.restrictions, hour, day_of_week)
    c_factor = complexity_factor(street_data.zone_count)
    final = clamp_availability(base * r_factor * c_factor)

    logger.debug(
        f"{street} h={hour} d={day_of_week}: base={base} restriction={r_factor:.3f} "
        f"complexity={c_factor} zones={street_data.zone_count}"
    )
    return AvailabilityEstimate(
        availability_pct=round(final, 1),
        confidence=determine_confidence(street, street_data.zone_count),
        zones_analyzed=street_data.zone_count,
        restriction_factor=r_factor,
        strategy=STRATEGY_RESTRICTION_TABLE,
    )
