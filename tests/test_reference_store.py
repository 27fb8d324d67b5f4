# tests/test_reference_store.py
"""Unit tests for loading the reference CSVs and building the street → zone index."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd
from unittest.mock import patch
from kerbside.config import settings
from kerbside.models.zone import LimitClass
from kerbside.services.reference_store import (
    PARKING_BAYS, PARKING_ZONES, SIGN_PLATES,
    build_street_zone_mapping, build_zone_restrictions, find_bays_on_street,
    find_zone_links_on_street, known_street_names, load_datasets,
)
from conftest import make_parking_bays, make_sign_plates, make_zone_links


class TestLoadDatasets:
    def test_missing_files_are_absent_keys(self, tmp_path):
        make_zone_links().to_csv(tmp_path / settings.PARKING_ZONES_FILE, index=False)

        datasets = load_datasets(str(tmp_path))

        assert set(datasets) == {PARKING_ZONES}
        assert len(datasets[PARKING_ZONES]) == 42

    def test_all_files_loaded(self, tmp_path):
        make_parking_bays().to_csv(tmp_path / settings.PARKING_BAYS_FILE, index=False)
        make_sign_plates().to_csv(tmp_path / settings.SIGN_PLATES_FILE, index=False)
        make_zone_links().to_csv(tmp_path / settings.PARKING_ZONES_FILE, index=False)

        datasets = load_datasets(str(tmp_path))

        assert set(datasets) == {PARKING_BAYS, SIGN_PLATES, PARKING_ZONES}

    def test_empty_file_is_skipped(self, tmp_path):
        (tmp_path / settings.SIGN_PLATES_FILE).write_text("")

        assert load_datasets(str(tmp_path)) == {}

    def test_defaults_to_configured_data_dir(self, tmp_path):
        with patch.object(settings, "DATA_DIR", str(tmp_path)):
            assert load_datasets() == {}


class TestBuildZoneRestrictions:
    def test_one_restriction_per_zone_in_zone_order(self):
        restrictions = build_zone_restrictions(make_sign_plates())
        assert [r.zone_id for r in restrictions] == ["7001", "7002", "8001", "9001", "9200"]

    def test_weekday_window_from_first_weekday_plate(self):
        zone = build_zone_restrictions(make_sign_plates())[0]
        assert zone.weekday_start == 450.0
        assert zone.weekday_end == 1110.0
        assert zone.has_window

    def test_weekend_flag_and_limit_class(self):
        zone = build_zone_restrictions(make_sign_plates())[0]
        assert zone.weekend_flag is True
        assert zone.limit_class == LimitClass.ONE_HOUR
        assert zone.limit_display == "1P MTR M-F 7:30-18:30"

    def test_weekend_only_zone_has_no_window(self):
        zone = next(r for r in build_zone_restrictions(make_sign_plates()) if r.zone_id == "8001")
        assert not zone.has_window
        assert zone.weekend_flag is True
        assert zone.limit_class == LimitClass.FOUR_HOUR

    def test_malformed_time_treated_as_absent(self):
        zone = next(r for r in build_zone_restrictions(make_sign_plates()) if r.zone_id == "9200")
        assert zone.weekday_start is None
        assert zone.weekday_end == 1080.0
        assert not zone.has_window

    def test_missing_columns_yield_nothing(self):
        assert build_zone_restrictions(None) == []
        assert build_zone_restrictions(pd.DataFrame({"ParkingZone": [1]})) == []

    def test_display_without_limit_is_other(self):
        plates = pd.DataFrame({
            "ParkingZone": [1], "Restriction_Days": ["Mon-Fri"],
            "Time_Restrictions_Start": ["08:00:00"], "Time_Restrictions_Finish": ["18:00:00"],
            "Restriction_Display": ["LZ 30M"],
        })
        assert build_zone_restrictions(plates)[0].limit_class == LimitClass.OTHER


class TestBuildStreetZoneMapping:
    def test_zone_counts(self):
        mapping = build_street_zone_mapping(make_zone_links())
        assert mapping["Collins Street"].zone_count == 12
        assert mapping["Bourke Street"].zone_count == 20
        assert mapping["Spring Street"].zone_count == 1

    def test_repeated_links_counted_once(self):
        links = pd.DataFrame({"OnStreet": ["A St"] * 3, "ParkingZone": [1, 1, 2]})
        mapping = build_street_zone_mapping(links)
        assert mapping["A St"].zone_count == 2
        assert mapping["A St"].zones == frozenset({"1", "2"})

    def test_exact_case_sensitive_keys(self):
        mapping = build_street_zone_mapping(make_zone_links())
        assert "collins street" not in mapping

    def test_restrictions_attached_in_zone_order(self):
        mapping = build_street_zone_mapping(make_zone_links(), make_sign_plates())
        assert [r.zone_id for r in mapping["Collins Street"].restrictions] == ["7001", "7002"]
        assert mapping["Bourke Street"].restrictions == []

    def test_no_sign_plates_means_no_restrictions(self):
        mapping = build_street_zone_mapping(make_zone_links())
        assert mapping["Collins Street"].restrictions == []

    def test_blank_street_and_missing_zone_skipped(self):
        links = pd.DataFrame({
            "OnStreet": ["Queen Street", None, "  ", "Queen Street"],
            "ParkingZone": [7110.0, 7111.0, 7112.0, None],
        })
        mapping = build_street_zone_mapping(links)
        assert list(mapping) == ["Queen Street"]
        assert mapping["Queen Street"].zones == frozenset({"7110"})

    def test_missing_table(self):
        assert build_street_zone_mapping(None) == {}


class TestStreetQueries:
    def test_bays_without_sensor_excluded(self):
        assert len(find_bays_on_street(make_parking_bays(), "Collins")) == 3

    def test_bay_match_is_case_insensitive(self):
        assert len(find_bays_on_street(make_parking_bays(), "collins street")) == 3

    def test_bay_query_is_not_a_regex(self):
        assert find_bays_on_street(make_parking_bays(), "Collins (").empty

    def test_zone_links_substring(self):
        links = find_zone_links_on_street(make_zone_links(), "lonsdale")
        assert set(links["OnStreet"]) == {"Little Lonsdale Street"}

    def test_missing_tables_give_empty_frames(self):
        assert find_bays_on_street(None, "Collins").empty
        assert find_zone_links_on_street(None, "Collins").empty

    def test_known_street_names(self, datasets):
        names = known_street_names(datasets)
        assert names[0].startswith("Collins Street between")
        assert "Bourke Street" in names
        assert len(names) == len(set(names))
