"""Tests for the Performance Management Chart (CTL/ATL/TSB)."""

import pytest
from datetime import date, timedelta

from ride_analytics.metrics.fitness import (
    PmcDay,
    calculate_pmc,
    get_form_status,
    group_tss_by_day,
    update_training_load,
)


class TestUpdateTrainingLoad:
    """Tests for the one-day load recurrence."""

    def test_first_day_from_zero(self):
        """From zero, one day of TSS 100 gives 100 / time constant."""
        assert abs(update_training_load(0.0, 100.0, 42) - 100 / 42) < 1e-9
        assert abs(update_training_load(0.0, 100.0, 7) - 100 / 7) < 1e-9

    def test_rest_day_decays(self):
        """A rest day multiplies the load by (tc - 1) / tc."""
        assert abs(update_training_load(42.0, 0.0, 42) - 41.0) < 1e-9

    def test_steady_state(self):
        """Load equal to daily TSS stays put."""
        assert update_training_load(80.0, 80.0, 7) == 80.0


class TestGroupTssByDay:
    """Tests for per-day TSS grouping."""

    def test_same_day_sessions_sum(self, make_session):
        sessions = [
            make_session(id="a", start_time="2025-01-05T07:00:00+01:00", tss=60),
            make_session(id="b", start_time="2025-01-05T18:30:00+01:00", tss=40),
        ]
        assert group_tss_by_day(sessions) == {"2025-01-05": 100.0}

    def test_missing_tss_counts_as_zero(self, make_session):
        sessions = [make_session(start_time="2025-01-05T07:00:00Z")]
        assert group_tss_by_day(sessions) == {"2025-01-05": 0.0}

    def test_date_key_is_not_shifted_to_utc(self, make_session):
        """The local calendar day in the timestamp is used as-is."""
        sessions = [make_session(start_time="2025-01-05T23:30:00-05:00", tss=50)]
        assert list(group_tss_by_day(sessions)) == ["2025-01-05"]

    def test_malformed_timestamp_skipped(self, make_session):
        sessions = [
            make_session(id="bad", start_time="not-a-date", tss=80),
            make_session(id="ok", start_time="2025-01-06T07:00:00Z", tss=30),
        ]
        assert group_tss_by_day(sessions) == {"2025-01-06": 30.0}


class TestCalculatePmc:
    """Tests for the day-by-day PMC walk."""

    def test_empty_snapshot(self, today):
        assert calculate_pmc([], today=today) == []

    def test_single_session_today(self, make_session, today):
        """One TSS 100 ride today: CTL 100/42, ATL 100/7."""
        sessions = [make_session(start_time=f"{today.isoformat()}T09:00:00Z", tss=100)]
        pmc = calculate_pmc(sessions, today=today)

        assert len(pmc) == 1
        last = pmc[-1]
        assert last.date == today.isoformat()
        assert abs(last.ctl - 2.381) < 0.01, f"Expected ~2.381, got {last.ctl}"
        assert abs(last.atl - 14.286) < 0.01, f"Expected ~14.286, got {last.atl}"
        assert abs(last.tsb - (-11.905)) < 0.01, f"Expected ~-11.905, got {last.tsb}"

    def test_session_yesterday_decays_one_day(self, make_session, today):
        yesterday = today - timedelta(days=1)
        sessions = [make_session(start_time=f"{yesterday.isoformat()}T09:00:00Z", tss=100)]
        pmc = calculate_pmc(sessions, today=today)

        assert [d.date for d in pmc] == [yesterday.isoformat(), today.isoformat()]
        assert pmc[1].tss == 0
        assert abs(pmc[1].ctl - (100 / 42) * (41 / 42)) < 0.01
        assert abs(pmc[1].atl - (100 / 7) * (6 / 7)) < 0.01
        assert abs(pmc[1].tsb - (pmc[1].ctl - pmc[1].atl)) < 1e-9

    def test_same_day_sessions_equal_one_combined_session(self, make_session, today):
        split = [
            make_session(id="a", start_time="2025-03-01T07:00:00Z", tss=60),
            make_session(id="b", start_time="2025-03-01T17:00:00Z", tss=40),
        ]
        combined = [make_session(id="c", start_time="2025-03-01T07:00:00Z", tss=100)]

        assert calculate_pmc(split, today=today) == calculate_pmc(combined, today=today)

    def test_all_null_tss_stays_zero(self, make_session, today):
        sessions = [
            make_session(id="a", start_time="2025-03-01T07:00:00Z"),
            make_session(id="b", start_time="2025-03-04T07:00:00Z"),
        ]
        pmc = calculate_pmc(sessions, today=today)

        assert len(pmc) == 10
        for day in pmc:
            assert day.ctl == 0 and day.atl == 0 and day.tsb == 0

    def test_one_entry_per_day_without_gaps(self, make_session, today):
        sessions = [
            make_session(id="b", start_time="2025-02-20T07:00:00Z", tss=90),
            make_session(id="a", start_time="2025-01-01T07:00:00Z", tss=50),
        ]
        pmc = calculate_pmc(sessions, today=today)

        expected_days = (today - date(2025, 1, 1)).days + 1
        assert len(pmc) == expected_days
        for prev, cur in zip(pmc, pmc[1:]):
            step = date.fromisoformat(cur.date) - date.fromisoformat(prev.date)
            assert step == timedelta(days=1)

    def test_loads_never_negative(self, make_session, today):
        sessions = [
            make_session(id=str(i), start_time=f"2025-02-{i:02d}T07:00:00Z", tss=tss)
            for i, tss in enumerate([0, 150, 0, 0, 80, 0, 220, 0, 10], start=1)
        ]
        for day in calculate_pmc(sessions, today=today):
            assert day.ctl >= 0
            assert day.atl >= 0

    def test_hand_computed_three_days(self, make_session):
        """TSS 70, rest, 35 walked by hand."""
        sessions = [
            make_session(id="a", start_time="2025-01-01T07:00:00Z", tss=70),
            make_session(id="b", start_time="2025-01-03T07:00:00Z", tss=35),
        ]
        pmc = calculate_pmc(sessions, today=date(2025, 1, 3))

        ctl = 70 / 42
        atl = 70 / 7
        ctl = ctl + (0 - ctl) / 42
        atl = atl + (0 - atl) / 7
        ctl = ctl + (35 - ctl) / 42
        atl = atl + (35 - atl) / 7

        assert pmc[-1].ctl == pytest.approx(ctl)
        assert pmc[-1].atl == pytest.approx(atl)
        assert pmc[-1].tss == 35

    def test_future_only_sessions_yield_nothing(self, make_session, today):
        later = today + timedelta(days=3)
        sessions = [make_session(start_time=f"{later.isoformat()}T07:00:00Z", tss=50)]
        assert calculate_pmc(sessions, today=today) == []

    def test_custom_time_constants(self, make_session, today):
        sessions = [make_session(start_time=f"{today.isoformat()}T07:00:00Z", tss=100)]
        pmc = calculate_pmc(sessions, today=today, ctl_time_constant=28, atl_time_constant=5)
        assert pmc[0].ctl == pytest.approx(100 / 28)
        assert pmc[0].atl == pytest.approx(20.0)

    def test_zero_time_constant_rejected(self, make_session, today):
        sessions = [make_session(start_time=f"{today.isoformat()}T07:00:00Z", tss=100)]
        with pytest.raises(ValueError):
            calculate_pmc(sessions, today=today, ctl_time_constant=0)

    def test_to_dict(self):
        day = PmcDay(date="2025-01-01", tss=50.0, ctl=1.0, atl=7.0, tsb=-6.0)
        assert day.to_dict() == {
            "date": "2025-01-01",
            "tss": 50.0,
            "ctl": 1.0,
            "atl": 7.0,
            "tsb": -6.0,
        }


class TestFormStatus:
    """Tests for TSB form labels."""

    @pytest.mark.parametrize(
        "tsb,expected",
        [
            (30, "fresh"),
            (5, "positive"),
            (-5, "neutral"),
            (-15, "fatigued"),
            (-30, "very_fatigued"),
        ],
    )
    def test_labels(self, tsb, expected):
        assert get_form_status(tsb) == expected
