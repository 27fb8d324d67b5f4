# scripts/setup/analyze_datasets.py
"""
Inspect the reference CSVs before first launch.
Prints what each dataset contains, which streets span the most zones, and a
deep dive on one street (default: the first flagship street).
Usage: python scripts/setup/analyze_datasets.py
       python scripts/setup/analyze_datasets.py --data-dir ./data --street Bourke
"""

import sys
import os
import argparse
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from kerbside.config import settings
from kerbside.services.reference_store import (
    COL_KERBSIDE_ID, COL_ROAD_SEGMENT, COL_STREET, COL_ZONE, PARKING_BAYS, PARKING_ZONES, SIGN_PLATES,
    build_street_zone_mapping, build_zone_restrictions, find_bays_on_street, find_zone_links_on_street,
    load_datasets,
)
from kerbside.utils.time_parser import format_minutes
from kerbside.utils.values import is_blank


def analyze_parking_bays(df):
    print("=== PARKING BAYS ===")
    if df is None:
        print("No parking bays data available\n")
        return
    print(f"Columns       : {', '.join(df.columns)}")
    print(f"Total records : {len(df)}")
    if COL_KERBSIDE_ID in df.columns:
        with_sensor = int(df[COL_KERBSIDE_ID].map(lambda v: not is_blank(v)).sum())
        print(f"With sensors  : {with_sensor}")
        print(f"No sensor     : {len(df) - with_sensor}")
    if COL_ROAD_SEGMENT in df.columns:
        print("Sample road segments:")
        for name in df[COL_ROAD_SEGMENT].dropna().unique()[:5]:
            print(f"  - {name}")
    print()


def analyze_sign_plates(df):
    print("=== SIGN PLATES ===")
    if df is None:
        print("No sign plates data available\n")
        return
    print(f"Columns       : {', '.join(df.columns)}")
    print(f"Total records : {len(df)}")
    restrictions = build_zone_restrictions(df)
    with_window = [r for r in restrictions if r.has_window]
    print(f"Zones         : {len(restrictions)} ({len(with_window)} with a weekday window)")
    by_class = {}
    for r in restrictions:
        by_class[r.limit_class.value] = by_class.get(r.limit_class.value, 0) + 1
    print(f"Limit classes : {by_class}")
    print()


def analyze_parking_zones(df, top: int = 5):
    print("=== PARKING ZONES ===")
    if df is None:
        print("No parking zones data available\n")
        return
    print(f"Columns       : {', '.join(df.columns)}")
    print(f"Total records : {len(df)}")
    mapping = build_street_zone_mapping(df)
    print(f"Streets       : {len(mapping)}")
    busiest = sorted(mapping.values(), key=lambda m: m.zone_count, reverse=True)[:top]
    print("Streets spanning the most zones:")
    for m in busiest:
        print(f"  - {m.street}: {m.zone_count} zones")
    print()


def street_deep_dive(datasets, street: str):
    print(f"=== {street.upper()} DEEP DIVE ===")
    bays = find_bays_on_street(datasets.get(PARKING_BAYS), street)
    print(f"Sensor bays   : {len(bays)}")

    links = find_zone_links_on_street(datasets.get(PARKING_ZONES), street)
    zones = sorted({str(z) for z in links[COL_ZONE].dropna()}) if not links.empty else []
    print(f"Zone links    : {len(links)}")
    print(f"Zone numbers  : {', '.join(zones) or 'none'}")

    if not links.empty and datasets.get(SIGN_PLATES) is not None:
        mapping = build_street_zone_mapping(links, datasets[SIGN_PLATES])
        for name, m in mapping.items():
            print(f"\n  {name} ({m.zone_count} zones)")
            for r in m.restrictions:
                window = (f"{format_minutes(r.weekday_start)}–{format_minutes(r.weekday_end)}"
                          if r.has_window else "no weekday window")
                print(f"    zone {r.zone_id:<8} {r.limit_class.value:<7} {window}"
                      f"{'  (+weekend)' if r.weekend_flag else ''}")
    print()


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--data-dir", default=settings.DATA_DIR)
    parser.add_argument("--street", default=settings.FLAGSHIP_STREETS[0] if settings.FLAGSHIP_STREETS else "Collins")
    args = parser.parse_args()

    print("🔍 Melbourne Parking Datasets — Analysis")
    print("=" * 60)
    print(f"📂 Data dir: {args.data_dir}\n")

    datasets = load_datasets(args.data_dir)
    for name, filename in settings.DATASET_FILES.items():
        mark = "✅" if name in datasets else "❌"
        count = f"{len(datasets[name])} records" if name in datasets else "missing"
        print(f"{mark} {filename}: {count}")
    print()

    analyze_parking_bays(datasets.get(PARKING_BAYS))
    analyze_sign_plates(datasets.get(SIGN_PLATES))
    analyze_parking_zones(datasets.get(PARKING_ZONES))
    street_deep_dive(datasets, args.street)

    if SIGN_PLATES in datasets and PARKING_ZONES in datasets:
        print("🎯 Restriction-aware estimation available.")
    else:
        print("⚠️  Sign plates or zone links missing — predictions will use the time-of-day curve only.")
    if PARKING_ZONES in datasets and COL_STREET not in datasets[PARKING_ZONES].columns:
        print(f"⚠️  Zone links have no '{COL_STREET}' column — street mapping will be empty.")


if __name__ == "__main__":
    main()
