# kerbside/models/zone.py
"""
Static reference types built from the zone-link and sign-plate tables.
Rebuilt on every estimation call, never mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class LimitClass(str, Enum):
    ONE_HOUR = "1P"
    TWO_HOUR = "2P"
    FOUR_HOUR = "4P"
    OTHER = "other"
    ABSENT = "absent"

    @classmethod
    def from_display(cls, display: Optional[str]) -> "LimitClass":
        """Classify a sign-plate display string such as "2P MTR M-SAT 7:30-18:30"."""
        if not display:
            return cls.ABSENT
        if "1P" in display:
            return cls.ONE_HOUR
        if "2P" in display:
            return cls.TWO_HOUR
        if "4P" in display:
            return cls.FOUR_HOUR
        return cls.OTHER


@dataclass(frozen=True)
class ZoneRestriction:
    zone_id: str
    weekday_start: Optional[float]    # minutes since midnight
    weekday_end: Optional[float]
    weekend_flag: bool = False        # present in the data, not used to gate activity
    limit_class: LimitClass = LimitClass.ABSENT
    limit_display: Optional[str] = None

    @property
    def has_window(self) -> bool:
        return self.weekday_start is not None and self.weekday_end is not None


@dataclass
class StreetZoneMapping:
    street: str
    zones: frozenset[str]
    restrictions: list[ZoneRestriction] = field(default_factory=list)

    @property
    def zone_count(self) -> int:
        return len(self.zones)
