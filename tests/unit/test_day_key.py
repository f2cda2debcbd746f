from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from fluidtrack.domain.models import DayKey
from fluidtrack.utils.time import compute_day_key, format_clock_time, resolve_timezone

NY = ZoneInfo("America/New_York")


@pytest.mark.unit
class TestComputeDayKey:

    def test_midnight_start_uses_local_calendar_date(self):
        # 02:00 UTC on the 18th is still the 17th in New York
        instant = datetime(2026, 10, 18, 2, 0, tzinfo=timezone.utc)
        assert compute_day_key(instant, 0, "America/New_York") == DayKey(date(2026, 10, 17))

    def test_early_morning_belongs_to_previous_day(self):
        instant = datetime(2026, 10, 18, 1, 30, tzinfo=NY)
        assert compute_day_key(instant, 4, NY) == DayKey(date(2026, 10, 17))

    def test_day_start_hour_is_inclusive(self):
        assert compute_day_key(datetime(2026, 10, 18, 4, 0, tzinfo=NY), 4, NY) == DayKey(date(2026, 10, 18))
        assert compute_day_key(datetime(2026, 10, 18, 3, 59, tzinfo=NY), 4, NY) == DayKey(date(2026, 10, 17))

    def test_stable_across_whole_logical_day(self):
        keys = {
            compute_day_key(datetime(2026, 10, 18, hour, 0, tzinfo=NY), 6, NY)
            for hour in range(6, 24)
        }
        keys |= {
            compute_day_key(datetime(2026, 10, 19, hour, 0, tzinfo=NY), 6, NY)
            for hour in range(0, 6)
        }
        assert keys == {DayKey(date(2026, 10, 18))}

    def test_naive_instant_is_treated_as_utc(self):
        naive = datetime(2026, 10, 18, 2, 0)
        aware = naive.replace(tzinfo=timezone.utc)
        assert compute_day_key(naive, 0, NY) == compute_day_key(aware, 0, NY)

    def test_dst_transition_day(self):
        # Clocks go back on Nov 1 2026; 01:30 happens twice, both before a 4am start
        first = datetime(2026, 11, 1, 5, 30, tzinfo=timezone.utc)   # 01:30 EDT
        second = datetime(2026, 11, 1, 6, 30, tzinfo=timezone.utc)  # 01:30 EST
        assert compute_day_key(first, 4, NY) == DayKey(date(2026, 10, 31))
        assert compute_day_key(second, 4, NY) == DayKey(date(2026, 10, 31))

    def test_rejects_out_of_range_start_hour(self):
        with pytest.raises(ValueError):
            compute_day_key(datetime(2026, 10, 18, tzinfo=timezone.utc), 24, NY)

    def test_unknown_timezone_falls_back_to_utc(self):
        instant = datetime(2026, 10, 18, 2, 0, tzinfo=timezone.utc)
        assert compute_day_key(instant, 0, "Mars/Olympus_Mons") == DayKey(date(2026, 10, 18))


@pytest.mark.unit
def test_day_key_shift_label_and_string():
    key = DayKey(date(2026, 10, 18))
    assert key.shift(-1) == DayKey(date(2026, 10, 17))
    assert key.shift(-18).day == date(2026, 9, 30)
    assert key.label == "Sun, Oct 18"
    assert str(key) == "2026-10-18"
    assert DayKey.parse("2026-10-18") == key


@pytest.mark.unit
def test_format_clock_time():
    assert format_clock_time(datetime(2026, 10, 18, 23, 5, tzinfo=timezone.utc), NY) == "7:05 PM"
    assert format_clock_time(datetime(2026, 10, 18, 4, 0, tzinfo=timezone.utc), NY) == "12:00 AM"
    assert format_clock_time(datetime(2026, 10, 18, 16, 30, tzinfo=timezone.utc), NY) == "12:30 PM"


@pytest.mark.unit
def test_resolve_timezone_passes_tzinfo_through():
    assert resolve_timezone(NY) is NY
