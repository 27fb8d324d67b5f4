# kerbside/services/reference_store.py
"""
Static Reference Store — loads and indexes the City of Melbourne reference CSVs.

Datasets (all optional, a missing file is just an absent key):
  parking_bays   — on-street bay inventory      (KerbsideID, RoadSegmentDescription)
  sign_plates    — sign-plate time restrictions (ParkingZone, Restriction_Days,
                                                 Time_Restrictions_Start/Finish, Restriction_Display)
  parking_zones  — zone ↔ street links          (OnStreet, ParkingZone)

The street → zones → restrictions index is rebuilt from these tables on every
call; nothing here holds state between requests.
"""

import os
from typing import Optional

import pandas as pd

from kerbside.config import settings
from kerbside.models.zone import LimitClass, StreetZoneMapping, ZoneRestriction
from kerbside.utils.logger import get_logger
from kerbside.utils.time_parser import parse_time_of_day
from kerbside.utils.values import is_blank, normalize_id, text_or_none

logger = get_logger(__name__)

PARKING_BAYS = "parking_bays"
SIGN_PLATES = "sign_plates"
PARKING_ZONES = "parking_zones"

# Column names as published on data.melbourne.vic.gov.au
COL_KERBSIDE_ID = "KerbsideID"
COL_ROAD_SEGMENT = "RoadSegmentDescription"
COL_ZONE = "ParkingZone"
COL_STREET = "OnStreet"
COL_DAYS = "Restriction_Days"
COL_START = "Time_Restrictions_Start"
COL_FINISH = "Time_Restrictions_Finish"
COL_DISPLAY = "Restriction_Display"

WEEKDAY_PATTERN = r"Mon|Tue|Wed|Thu|Fri"
WEEKEND_PATTERN = r"Sat|Sun"


def load_datasets(data_dir: Optional[str] = None) -> dict[str, pd.DataFrame]:
    """
    Read whichever reference CSVs exist in data_dir (default settings.DATA_DIR).
    Returns {dataset_name: DataFrame}; missing or unreadable files are left out.
    """
    data_dir = data_dir or settings.DATA_DIR
    datasets = {}

    for name, filename in settings.DATASET_FILES.items():
        path = os.path.join(data_dir, filename)
        if not os.path.exists(path):
            logger.warning(f"Missing dataset {name}: {path}")
            continue
        try:
            datasets[name] = pd.read_csv(path)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as e:
            logger.error(f"Could not read dataset {name} from {path}: {e}")
            continue
        logger.debug(f"Loaded {name}: {len(datasets[name])} records")

    return datasets


def _has_columns(df: Optional[pd.DataFrame], *columns: str) -> bool:
    return df is not None and not df.empty and all(c in df.columns for c in columns)


def build_zone_restrictions(sign_plates: Optional[pd.DataFrame]) -> list[ZoneRestriction]:
    """
    One ZoneRestriction per zone, in ascending zone order.
    Times come from the zone's first weekday-tagged sign plate; the limit class
    comes from the zone's first display string whatever its days.
    """
    if not _has_columns(sign_plates, COL_ZONE, COL_DAYS):
        return []

    plates = sign_plates.dropna(subset=[COL_ZONE])
    restrictions = []

    for zone, rows in plates.groupby(COL_ZONE, sort=True):
        zone_id = normalize_id(zone)
        if zone_id is None:
            continue

        days = rows[COL_DAYS].fillna("").astype(str)
        weekday_rows = rows[days.str.contains(WEEKDAY_PATTERN, regex=True)]

        start = end = None
        if not weekday_rows.empty:
            start = parse_time_of_day(weekday_rows[COL_START].iloc[0]) if COL_START in rows else None
            end = parse_time_of_day(weekday_rows[COL_FINISH].iloc[0]) if COL_FINISH in rows else None

        display = text_or_none(rows[COL_DISPLAY].iloc[0]) if COL_DISPLAY in rows else None

        restrictions.append(ZoneRestriction(
            zone_id=zone_id,
            weekday_start=start,
            weekday_end=end,
            weekend_flag=bool(days.str.contains(WEEKEND_PATTERN, regex=True).any()),
            limit_class=LimitClass.from_display(display),
            limit_display=display,
        ))

    return restrictions


def build_street_zone_mapping(
    zone_links: Optional[pd.DataFrame],
    sign_plates: Optional[pd.DataFrame] = None,
) -> dict[str, StreetZoneMapping]:
    """
    Group zone links by street name (exact, case-sensitive) and attach the
    restrictions of every zone on that street.
    """
    if not _has_columns(zone_links, COL_STREET, COL_ZONE):
        return {}

    restrictions = build_zone_restrictions(sign_plates)
    links = zone_links.dropna(subset=[COL_STREET, COL_ZONE])
    mapping = {}

    for street, rows in links.groupby(COL_STREET, sort=False):
        if is_blank(street):
            continue
        zones = frozenset(z for z in (normalize_id(v) for v in rows[COL_ZONE]) if z is not None)
        if not zones:
            continue
        mapping[street] = StreetZoneMapping(
            street=street,
            zones=zones,
            restrictions=[r for r in restrictions if r.zone_id in zones],
        )

    return mapping


# ── Substring queries used by street search and the zone-filter strategy ──────

def find_bays_on_street(parking_bays: Optional[pd.DataFrame], street: str) -> pd.DataFrame:
    """Sensor-equipped bays whose road segment description contains the street name."""
    if not _has_columns(parking_bays, COL_KERBSIDE_ID, COL_ROAD_SEGMENT):
        return pd.DataFrame(columns=[COL_KERBSIDE_ID, COL_ROAD_SEGMENT])
    has_sensor = parking_bays[COL_KERBSIDE_ID].map(lambda v: not is_blank(v))
    bays = parking_bays[has_sensor]
    on_street = bays[COL_ROAD_SEGMENT].fillna("").astype(str).str.contains(street, case=False, regex=False)
    return bays[on_street]


def find_zone_links_on_street(zone_links: Optional[pd.DataFrame], street: str) -> pd.DataFrame:
    """Zone-link rows whose street name contains the query (case-insensitive)."""
    if not _has_columns(zone_links, COL_STREET, COL_ZONE):
        return pd.DataFrame(columns=[COL_STREET, COL_ZONE])
    on_street = zone_links[COL_STREET].fillna("").astype(str).str.contains(street, case=False, regex=False)
    return zone_links[on_street]


def known_street_names(datasets: dict[str, pd.DataFrame]) -> list[str]:
    """Distinct street names across the bay inventory and zone links, first-seen order."""
    names = []
    bays = datasets.get(PARKING_BAYS)
    if bays is not None and COL_ROAD_SEGMENT in bays.columns:
        names.extend(bays[COL_ROAD_SEGMENT].dropna().astype(str).unique())
    zones = datasets.get(PARKING_ZONES)
    if zones is not None and COL_STREET in zones.columns:
        names.extend(zones[COL_STREET].dropna().astype(str).unique())
    return list(dict.fromkeys(names))
