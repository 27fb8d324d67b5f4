# tests/conftest.py
"""Shared fixtures: a small slice of the Melbourne reference tables and a sensor snapshot."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd
import pytest
from kerbside.models.sensor import SensorRecord, SensorSnapshot
from kerbside.services.reference_store import PARKING_BAYS, PARKING_ZONES, SIGN_PLATES

COLLINS_SEGMENT = "Collins Street between Swanston Street and Elizabeth Street"
LONSDALE_SEGMENT = "Lonsdale Street between Russell Street and Exhibition Street"


def make_zone_links():
    rows = []
    rows += [("Collins Street", 7001 + i) for i in range(12)]
    rows += [("Little Lonsdale Street", 8001 + i) for i in range(3)]
    rows += [("Flinders Street", 9001 + i) for i in range(5)]
    rows += [("Spring Street", 9100)]
    rows += [("Bourke Street", 6001 + i) for i in range(20)]
    rows += [("King Street", 9200)]
    return pd.DataFrame(rows, columns=["OnStreet", "ParkingZone"])


def make_sign_plates():
    return pd.DataFrame(
        [
            (7001, "Mon-Fri", "07:30:00", "18:30:00", "1P MTR M-F 7:30-18:30"),
            (7001, "Sat", "07:30:00", "12:30:00", "2P MTR SAT 7:30-12:30"),
            (7002, "Mon-Fri", "07:00:00", "19:00:00", "2P MTR M-F 7:00-19:00"),
            (8001, "Sat-Sun", "08:00:00", "12:00:00", "4P SAT-SUN 8:00-12:00"),
            (9001, "Mon-Fri", "08:00:00", "18:00:00", "4P MTR M-F 8:00-18:00"),
            (9200, "Mon-Fri", "late", "18:00:00", "2P"),
        ],
        columns=[
            "ParkingZone", "Restriction_Days", "Time_Restrictions_Start",
            "Time_Restrictions_Finish", "Restriction_Display",
        ],
    )


def make_parking_bays():
    return pd.DataFrame(
        {
            "KerbsideID": [1001, 1002, 1003, None, 2001],
            "RoadSegmentDescription": [
                COLLINS_SEGMENT, COLLINS_SEGMENT, COLLINS_SEGMENT, COLLINS_SEGMENT, LONSDALE_SEGMENT,
            ],
        }
    )


def make_datasets():
    return {
        PARKING_BAYS: make_parking_bays(),
        SIGN_PLATES: make_sign_plates(),
        PARKING_ZONES: make_zone_links(),
    }


def make_sensor(kerbside_id, status, zone=None, lat=-37.81, lon=144.96):
    return SensorRecord(
        kerbside_id=kerbside_id,
        zone_number=zone,
        status=status,
        latitude=lat,
        longitude=lon,
        last_updated="2026-10-19T09:00:00+11:00",
    )


def make_snapshot(fetched_at=0.0):
    return SensorSnapshot(
        records=(
            make_sensor("1001", "Unoccupied", zone="7001"),
            make_sensor("1002", "Occupied", zone="7001"),
            make_sensor("1003", "Present", zone="7002"),
            make_sensor("5555", "Unoccupied", zone="9001"),
            make_sensor("6666", "Occupied", zone="9002"),
        ),
        fetched_at=fetched_at,
    )


@pytest.fixture
def datasets():
    return make_datasets()


@pytest.fixture
def snapshot():
    return make_snapshot()
