from datetime import date, datetime

import pytest
import pytz

from solarclock.dst import dst_offset_now, european_dst_offset_hours, last_sunday, local_now


class TestLastSunday:
    @pytest.mark.parametrize(
        "year,month,expected",
        [
            (2024, 3, date(2024, 3, 31)),
            (2024, 10, date(2024, 10, 27)),
            (2025, 3, date(2025, 3, 30)),
            (2025, 10, date(2025, 10, 26)),
            (2026, 3, date(2026, 3, 29)),
            (2026, 10, date(2026, 10, 25)),
        ],
    )
    def test_known_transitions(self, year, month, expected):
        assert last_sunday(year, month) == expected

    def test_is_always_a_sunday_in_last_week(self):
        for year in range(1990, 2040):
            for month in (3, 10):
                d = last_sunday(year, month)
                assert d.weekday() == 6
                assert d.day >= 25


class TestEuropeanDstOffset:
    @pytest.mark.parametrize("year", range(1980, 2040))
    def test_winter_and_summer(self, year):
        assert european_dst_offset_hours(date(year, 1, 15), 12) == 0
        assert european_dst_offset_hours(date(year, 7, 15), 12) == 1
        assert european_dst_offset_hours(date(year, 12, 15), 12) == 0

    def test_march_transition_day(self):
        d = date(2024, 3, 31)
        assert european_dst_offset_hours(d, 0) == 0
        assert european_dst_offset_hours(d, 1) == 0
        assert european_dst_offset_hours(d, 2) == 1
        assert european_dst_offset_hours(d, 23) == 1

    def test_around_march_transition(self):
        assert european_dst_offset_hours(date(2024, 3, 30), 23) == 0
        assert european_dst_offset_hours(date(2024, 4, 1), 0) == 1

    def test_october_transition_day(self):
        d = date(2024, 10, 27)
        assert european_dst_offset_hours(d, 0) == 1
        assert european_dst_offset_hours(d, 1) == 1
        assert european_dst_offset_hours(d, 2) == 0

    def test_around_october_transition(self):
        assert european_dst_offset_hours(date(2024, 10, 26), 23) == 1
        assert european_dst_offset_hours(date(2024, 10, 28), 0) == 0


class TestLocalNow:
    def test_naive_is_utc(self):
        local = local_now(2, datetime(2024, 6, 1, 22, 30))
        assert (local.date(), local.hour, local.minute) == (date(2024, 6, 2), 0, 30)

    def test_aware_input(self):
        now = pytz.utc.localize(datetime(2024, 6, 1, 12, 0))
        local = local_now(3.5, now)
        assert (local.hour, local.minute) == (15, 30)

    def test_negative_offset(self):
        local = local_now(-5, datetime(2024, 1, 1, 3, 0))
        assert (local.date(), local.hour) == (date(2023, 12, 31), 22)

    def test_defaults_to_current_time(self):
        local = local_now(0)
        assert local.utcoffset().total_seconds() == 0


class TestDstOffsetNow:
    def test_summer(self):
        assert dst_offset_now(2, datetime(2024, 7, 1, 12)) == 1

    def test_winter(self):
        assert dst_offset_now(2, datetime(2024, 1, 1, 12)) == 0

    def test_uses_base_timezone_clock(self):
        # 00:30 UTC on the March Sunday is 02:30 in UTC+2
        assert dst_offset_now(2, datetime(2024, 3, 31, 0, 30)) == 1
        # and still 00:30 in UTC+0
        assert dst_offset_now(0, datetime(2024, 3, 31, 0, 30)) == 0

    def test_day_boundary_shift(self):
        # 23:30 UTC on Saturday is 01:30 Sunday in UTC+2, before the switch hour
        assert dst_offset_now(2, datetime(2024, 3, 30, 23, 30)) == 0
