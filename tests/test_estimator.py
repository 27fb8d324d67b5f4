# tests/test_estimator.py
"""Unit tests for the restriction-table availability estimator."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd
import pytest
from kerbside.models.estimate import Confidence, clamp_availability
from kerbside.models.zone import LimitClass, ZoneRestriction
from kerbside.services.estimator import (
    STRATEGY_BASIC, STRATEGY_RESTRICTION_TABLE,
    base_availability, complexity_factor, determine_confidence, estimate, estimate_basic,
    restriction_factor, time_based_availability,
)
from kerbside.services.reference_store import PARKING_ZONES, SIGN_PLATES
from kerbside.utils.street_matcher import StreetMatcher

STREETS = [
    "Collins Street", "Little Lonsdale Street", "Flinders Street", "Spring Street",
    "Bourke Street", "King Street", "Random Lane",
]


class TestCurves:
    @pytest.mark.parametrize("hour,expected", [
        (0, 88), (4, 88), (5, 85), (7, 20), (9, 15), (11, 25), (12, 22),
        (14, 28), (17, 18), (20, 45), (22, 65), (23, 65),
    ])
    def test_weekday_base_curve(self, hour, expected):
        assert base_availability(hour, 1) == expected

    @pytest.mark.parametrize("hour,expected", [
        (3, 85), (6, 70), (9, 55), (12, 35), (18, 40), (22, 65),
    ])
    def test_weekend_base_curve(self, hour, expected):
        assert base_availability(hour, 6) == expected
        assert base_availability(hour, 7) == expected

    def test_time_based_curve_is_a_different_table(self):
        assert time_based_availability(9, 1) == 12
        assert base_availability(9, 1) == 15
        assert time_based_availability(22, 1) == 42
        assert time_based_availability(23, 1) == 85
        assert time_based_availability(22, 6) == 80


class TestFactors:
    def test_no_restrictions_is_neutral(self):
        assert restriction_factor([], 9, 1) == 1.0

    def test_active_restriction_uses_turnover(self):
        r = ZoneRestriction("1", 480.0, 1080.0, limit_class=LimitClass.FOUR_HOUR)
        assert restriction_factor([r], 9, 1) == pytest.approx(0.855)

    def test_inactive_restriction_boosts(self):
        r = ZoneRestriction("1", 480.0, 1080.0, limit_class=LimitClass.ONE_HOUR)
        assert restriction_factor([r], 20, 1) == 1.15

    @pytest.mark.parametrize("zones,expected", [(0, 1.0), (9, 1.0), (10, 0.98), (19, 0.98), (20, 0.95), (50, 0.95)])
    def test_complexity_factor(self, zones, expected):
        assert complexity_factor(zones) == expected

    def test_confidence_levels(self):
        flagship = StreetMatcher(["Collins"])
        assert determine_confidence("Collins Street", 1, flagship) == Confidence.VERY_HIGH
        assert determine_confidence("Bourke Street", 10, flagship) == Confidence.HIGH
        assert determine_confidence("Flinders Street", 5, flagship) == Confidence.MEDIUM
        assert determine_confidence("Spring Street", 4, flagship) == Confidence.LOW

    def test_clamp(self):
        assert clamp_availability(120.0) == 95.0
        assert clamp_availability(1.0) == 5.0
        assert clamp_availability(42.0) == 42.0


class TestEstimate:
    def test_collins_morning_one_hour_active(self, datasets):
        result = estimate("Collins Street", 9, 1, datasets)
        assert result.restriction_factor == pytest.approx(1.14)
        assert result.availability_pct == 16.8
        assert result.confidence == Confidence.VERY_HIGH
        assert result.zones_analyzed == 12
        assert result.strategy == STRATEGY_RESTRICTION_TABLE

    def test_collins_evening_outside_enforced_hours(self, datasets):
        result = estimate("Collins Street", 20, 1, datasets)
        assert result.restriction_factor == 1.15
        assert result.availability_pct == 50.7

    def test_later_zone_matches_when_first_has_ended(self, datasets):
        # 7001 ends 18:30, 7002 (2P) runs to 19:00 inclusive
        result = estimate("Collins Street", 19, 1, datasets)
        assert result.restriction_factor == pytest.approx(1.045)

    def test_weekend_is_never_enforced(self, datasets):
        result = estimate("Collins Street", 10, 6, datasets)
        assert result.restriction_factor == 1.15
        assert result.availability_pct == pytest.approx(62.0, abs=0.05)

    def test_zone_without_weekday_window(self, datasets):
        result = estimate("Little Lonsdale Street", 9, 1, datasets)
        assert result.restriction_factor == 1.15
        assert result.confidence == Confidence.LOW
        assert result.zones_analyzed == 3

    def test_four_hour_zone(self, datasets):
        result = estimate("Flinders Street", 9, 1, datasets)
        assert result.restriction_factor == pytest.approx(0.855)
        assert result.confidence == Confidence.MEDIUM

    def test_street_without_sign_plates(self, datasets):
        result = estimate("Spring Street", 9, 1, datasets)
        assert result.restriction_factor == 1.0
        assert result.availability_pct == 15.0
        assert result.zones_analyzed == 1

    def test_many_zones_discounted(self, datasets):
        result = estimate("Bourke Street", 9, 1, datasets)
        assert result.zones_analyzed == 20
        assert result.confidence == Confidence.HIGH
        assert result.availability_pct == pytest.approx(14.25, abs=0.06)

    def test_unknown_street_uses_basic_estimate(self, datasets):
        result = estimate("Random Lane", 9, 1, datasets)
        assert result.availability_pct == 15.0
        assert result.confidence == Confidence.LOW
        assert result.zones_analyzed == 0
        assert result.restriction_factor == 1.0
        assert result.strategy == STRATEGY_BASIC

    def test_street_lookup_is_exact(self, datasets):
        result = estimate("collins street", 9, 1, datasets)
        assert result.strategy == STRATEGY_BASIC
        assert result.availability_pct == 13.5

    def test_zones_analyzed_matches_mapping(self, datasets):
        for street, zones in [("Collins Street", 12), ("Flinders Street", 5), ("King Street", 1)]:
            assert estimate(street, 12, 2, datasets).zones_analyzed == zones

    def test_always_within_bounds(self, datasets):
        for street in STREETS:
            for day in range(1, 8):
                for hour in range(24):
                    pct = estimate(street, hour, day, datasets).availability_pct
                    assert 5.0 <= pct <= 95.0, (street, hour, day, pct)


def make_single_street_datasets(links, plates=None):
    plates = plates if plates is not None else pd.DataFrame(columns=[
        "ParkingZone", "Restriction_Days", "Time_Restrictions_Start",
        "Time_Restrictions_Finish", "Restriction_Display",
    ])
    return {PARKING_ZONES: links, SIGN_PLATES: plates}


class TestEdgeTables:
    def test_window_ending_at_midnight(self):
        links = pd.DataFrame({"OnStreet": ["Spring Street"], "ParkingZone": [9100]})
        plates = pd.DataFrame({
            "ParkingZone": [9100], "Restriction_Days": ["Mon-Fri"],
            "Time_Restrictions_Start": ["07:00:00"], "Time_Restrictions_Finish": ["24:00:00"],
            "Restriction_Display": ["2P MTR M-F 7:00-24:00"],
        })
        datasets = make_single_street_datasets(links, plates)

        assert estimate("Spring Street", 21, 1, datasets).restriction_factor == pytest.approx(1.045)
        assert estimate("Spring Street", 23, 1, datasets).restriction_factor == pytest.approx(1.045)
        assert estimate("Spring Street", 6, 1, datasets).restriction_factor == 1.15

    def test_repeated_zone_links_counted_once(self):
        links = pd.DataFrame({"OnStreet": ["A St"] * 3, "ParkingZone": [1, 1, 2]})
        result = estimate("A St", 9, 1, make_single_street_datasets(links))
        assert result.zones_analyzed == 2
        assert result.strategy == STRATEGY_RESTRICTION_TABLE


class TestEstimateBasic:
    def test_street_nudge(self):
        assert estimate_basic("Bourke Lane", 9, 1).availability_pct == 13.5
        assert estimate_basic("Queen Street", 9, 1).availability_pct == pytest.approx(14.2, abs=0.05)

    def test_no_nudge(self):
        result = estimate_basic("Random Lane", 14, 1)
        assert result.availability_pct == 28.0
        assert result.confidence == Confidence.LOW

    def test_to_dict_exposes_confidence_value(self):
        data = estimate_basic("Random Lane", 14, 1).to_dict()
        assert data["confidence"] == "low"
        assert data["strategy"] == STRATEGY_BASIC
