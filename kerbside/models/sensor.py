# kerbside/models/sensor.py
"""
Live bay-sensor records. A SensorSnapshot is owned by the SensorCache and is
replaced wholesale on refresh.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from kerbside.utils.values import normalize_id, text_or_none

STATUS_UNOCCUPIED = "Unoccupied"
STATUS_OCCUPIED = "Occupied"
STATUS_PRESENT = "Present"


@dataclass(frozen=True)
class SensorRecord:
    kerbside_id: Optional[str]
    zone_number: Optional[str]
    status: Optional[str]          # Unoccupied | Occupied | Present | ...
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    last_updated: Optional[str] = None

    @classmethod
    def from_feed(cls, raw: dict[str, Any]) -> "SensorRecord":
        location = raw.get("location") or {}
        if not isinstance(location, dict):
            location = {}
        return cls(
            kerbside_id=normalize_id(raw.get("kerbsideid")),
            zone_number=normalize_id(raw.get("zone_number")),
            status=text_or_none(raw.get("status_description")),
            latitude=location.get("lat"),
            longitude=location.get("lon"),
            last_updated=text_or_none(raw.get("lastupdated")),
        )

    @property
    def is_available(self) -> bool:
        return self.status == STATUS_UNOCCUPIED

    def to_spot(self) -> dict:
        return {
            "kerbsideid": self.kerbside_id,
            "zone_number": self.zone_number,
            "location": {"lat": self.latitude, "lon": self.longitude},
            "lastupdated": self.last_updated,
        }


@dataclass(frozen=True)
class SensorSnapshot:
    records: tuple[SensorRecord, ...]
    fetched_at: float              # clock() value at fetch time
    fetched_at_iso: Optional[str] = field(default=None, compare=False)

    def __len__(self) -> int:
        return len(self.records)
