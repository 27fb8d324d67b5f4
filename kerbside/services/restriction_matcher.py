# kerbside/services/restriction_matcher.py
"""
Restriction Matcher — is a time-limited restriction enforced on a street at a given hour?

Only weekday windows gate activity (days 1–5, ISO numbering). Weekend flags are
carried on ZoneRestriction but ignored here.
Windows are inclusive at both ends; the query hour is always HH:00:00.
"""

from dataclasses import dataclass
from typing import Iterable

from kerbside.models.zone import LimitClass, ZoneRestriction
from kerbside.utils.time_parser import hour_to_minutes

TURNOVER_FACTORS = {
    LimitClass.ONE_HOUR: 1.2,    # short limit → high turnover → more free bays
    LimitClass.TWO_HOUR: 1.1,
    LimitClass.FOUR_HOUR: 0.9,
}


@dataclass(frozen=True)
class RestrictionMatch:
    active: bool
    limit_class: LimitClass = LimitClass.ABSENT
    zone_id: str | None = None


INACTIVE = RestrictionMatch(active=False)


def is_weekday(day_of_week: int) -> bool:
    return day_of_week <= 5


def is_restriction_active(
    restrictions: Iterable[ZoneRestriction], hour: int, day_of_week: int
) -> RestrictionMatch:
    """First restriction whose weekday window covers the hour wins; no aggregation."""
    if not is_weekday(day_of_week):
        return INACTIVE

    now = hour_to_minutes(hour)
    for restriction in restrictions:
        if not restriction.has_window:
            continue
        if restriction.weekday_start <= now <= restriction.weekday_end:
            return RestrictionMatch(
                active=True,
                limit_class=restriction.limit_class,
                zone_id=restriction.zone_id,
            )
    return INACTIVE


def turnover_factor(limit_class: LimitClass) -> float:
    return TURNOVER_FACTORS.get(limit_class, 1.0)
