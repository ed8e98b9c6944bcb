"""Tests for decoupling, time-in-zone and time-to-zone."""

import pytest

from ride_analytics.analysis.zones import (
    HrPowerPoint,
    TimeInZoneResult,
    calculate_decoupling,
    calculate_time_in_zone,
    calculate_time_to_zone,
)


ZONE_VALUES = [50, 80, 90, 100, 150, 175, 200, 210, 250, 300]


class TestDecoupling:
    """Tests for HR:Power decoupling."""

    def test_steady_effort_no_drift(self):
        series = [HrPowerPoint(200, 150)] * 40
        assert abs(calculate_decoupling(series)) < 1e-9

    def test_hr_drift_ten_percent(self):
        series = [HrPowerPoint(200, 150)] * 20 + [HrPowerPoint(200, 165)] * 20
        assert calculate_decoupling(series) == pytest.approx(10.0)

    def test_negative_drift(self):
        series = [HrPowerPoint(200, 160)] * 20 + [HrPowerPoint(200, 144)] * 20
        assert calculate_decoupling(series) == pytest.approx(-10.0)

    def test_too_few_points(self):
        assert calculate_decoupling([HrPowerPoint(200, 150)] * 19) is None
        assert calculate_decoupling([]) is None

    def test_invalid_points_excluded_before_count(self):
        series = (
            [HrPowerPoint(200, 150)] * 15
            + [HrPowerPoint(None, 150)] * 5
            + [HrPowerPoint(0, 150)] * 5
            + [HrPowerPoint(200, None)] * 5
        )
        assert calculate_decoupling(series) is None

    def test_split_by_count_of_valid_points(self):
        """Zero-power coasting in the middle does not move the split."""
        series = (
            [HrPowerPoint(200, 150)] * 10
            + [HrPowerPoint(0, 120)] * 30
            + [HrPowerPoint(200, 165)] * 10
        )
        assert calculate_decoupling(series) == pytest.approx(10.0)

    def test_custom_minimum(self):
        series = [HrPowerPoint(200, 150)] * 4
        assert calculate_decoupling(series, min_points=4) == pytest.approx(0.0)

    def test_single_point_with_low_minimum(self):
        assert calculate_decoupling([HrPowerPoint(200, 150)], min_points=1) is None

    def test_explicit_zero_minimum_still_needs_two_points(self):
        assert calculate_decoupling([HrPowerPoint(200, 150)], min_points=0) is None
        series = [HrPowerPoint(200, 150), HrPowerPoint(200, 165)]
        assert calculate_decoupling(series, min_points=0) == pytest.approx(10.0)

    def test_low_minimum_from_environment(self, monkeypatch):
        monkeypatch.setenv("RIDE_ANALYTICS_DECOUPLING_MIN_POINTS", "1")
        assert calculate_decoupling([HrPowerPoint(200, 150)]) is None


class TestTimeInZone:
    """Tests for below/in/above bucketing."""

    def test_one_second_interval(self):
        result = calculate_time_in_zone(ZONE_VALUES, 100, 200, 1)
        assert result == TimeInZoneResult(below_secs=3, in_zone_secs=4, above_secs=3)

    def test_five_second_interval(self):
        result = calculate_time_in_zone(ZONE_VALUES, 100, 200, 5)
        assert result.below_secs == 15
        assert result.in_zone_secs == 20
        assert result.above_secs == 15
        assert result.total_secs == 50

    def test_bounds_inclusive(self):
        result = calculate_time_in_zone([100, 200], 100, 200, 1)
        assert result.in_zone_secs == 2

    def test_missing_values_skipped(self):
        result = calculate_time_in_zone([None, 150, None], 100, 200, 1)
        assert result.total_secs == 1

    def test_empty(self):
        assert calculate_time_in_zone([], 100, 200, 1).to_dict() == {
            "below_secs": 0.0,
            "in_zone_secs": 0.0,
            "above_secs": 0.0,
        }


class TestTimeToZone:
    """Tests for time until first in-zone value."""

    def test_reaches_zone(self):
        assert calculate_time_to_zone([50, 60, 70, 150, 160], 100, 200, 1) == 3

    def test_interval_scales(self):
        assert calculate_time_to_zone([50, 60, 70, 150, 160], 140, 200, 0.5) == 1.5

    def test_already_in_zone(self):
        assert calculate_time_to_zone([150, 50], 140, 200, 1) == 0

    def test_from_above(self):
        assert calculate_time_to_zone([260, 230, 200], 140, 200, 1) == 2

    def test_never_reaches(self):
        assert calculate_time_to_zone([50, 60, 70], 100, 200, 1) is None
        assert calculate_time_to_zone([], 140, 200, 1) is None
