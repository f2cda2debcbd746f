"""
Unit Tests for History Assembler
"""

from datetime import date, datetime, timezone

import pytest

from fakes import FakeEventSource, FixedClock
from fluidtrack.domain.errors import DataSourceUnavailable
from fluidtrack.domain.models import (
    DayEvents,
    DayKey,
    GagEvent,
    IntakeEvent,
    IntakeFluid,
    TrackerConfig,
    Trend,
    WellnessCheck,
    WellnessSlot,
)
from fluidtrack.domain.services.history_assembler import (
    HistoryAssembler,
    compare_trend,
    evening_trends,
    history_trends,
)

# Sat Oct 17 2026, 8:00 PM in New York
NOW = datetime(2026, 10, 18, 0, 0, tzinfo=timezone.utc)
TODAY = DayKey(date(2026, 10, 17))


@pytest.fixture
def config():
    return TrackerConfig(timezone="America/New_York", day_start_hour=0)


def evening(**scores):
    return WellnessCheck(slot=WellnessSlot.EVENING, **scores)


class TestBuildHistory:

    async def test_returns_consecutive_days_today_first(self, config):
        source = FakeEventSource()
        assembler = HistoryAssembler(source, clock=FixedClock(NOW))

        days = await assembler.build_history(7, config)

        assert [str(d.day_key) for d in days] == [
            "2026-10-17", "2026-10-16", "2026-10-15", "2026-10-14",
            "2026-10-13", "2026-10-12", "2026-10-11",
        ]
        assert days[0].is_today
        assert not any(d.is_today for d in days[1:])
        assert source.requested == [str(d.day_key) for d in days]

    async def test_empty_past_days_collapse_but_today_never_does(self, config):
        yesterday = str(TODAY.shift(-1))
        source = FakeEventSource(events={
            yesterday: DayEvents(
                intake=[IntakeEvent(NOW, IntakeFluid.MILK, 150)],
            ),
            str(TODAY.shift(-2)): DayEvents(gags=[GagEvent(NOW)]),
        })
        assembler = HistoryAssembler(source, clock=FixedClock(NOW))

        days = await assembler.build_history(4, config)

        assert [d.collapsed for d in days] == [False, False, False, True]
        assert days[0].is_empty
        assert days[1].intake.total_ml == 150

    async def test_day_start_hour_moves_today(self):
        # 8 PM local with a 9 PM day start still belongs to the 16th
        config = TrackerConfig(timezone="America/New_York", day_start_hour=21)
        assembler = HistoryAssembler(FakeEventSource(), clock=FixedClock(NOW))

        days = await assembler.build_history(1, config)

        assert days[0].day_key == DayKey(date(2026, 10, 16))

    async def test_any_failed_day_fails_the_whole_call(self, config):
        source = FakeEventSource(fail_on=[TODAY.shift(-3)])
        assembler = HistoryAssembler(source, clock=FixedClock(NOW))

        with pytest.raises(DataSourceUnavailable):
            await assembler.build_history(7, config)

    async def test_source_unavailable_passes_through(self, config):
        error = DataSourceUnavailable("Event store unreachable")
        source = FakeEventSource(fail_on=[TODAY], error=error)
        assembler = HistoryAssembler(source, clock=FixedClock(NOW))

        with pytest.raises(DataSourceUnavailable) as exc_info:
            await assembler.build_history(3, config)

        assert exc_info.value is error

    @pytest.mark.parametrize("days", [0, -1])
    async def test_rejects_non_positive_days(self, config, days):
        assembler = HistoryAssembler(FakeEventSource(), clock=FixedClock(NOW))
        with pytest.raises(ValueError):
            await assembler.build_history(days, config)


class TestTrends:

    @pytest.mark.parametrize("current,previous,expected", [
        (5, 3, Trend.UP),
        (2, 3, Trend.DOWN),
        (5, 5, Trend.FLAT),
        (0, 1, Trend.DOWN),
        (None, 3, None),
        (3, None, None),
        (None, None, None),
    ])
    def test_compare_trend(self, current, previous, expected):
        assert compare_trend(current, previous) == expected

    def test_evening_trends_per_field(self):
        trends = evening_trends(
            evening(energy=5, cyanosis=1),
            evening(energy=3, cyanosis=1),
            ("energy", "cyanosis"),
        )
        assert trends == {"energy": Trend.UP, "cyanosis": Trend.FLAT}

    def test_missing_evening_gives_no_trend(self):
        trends = evening_trends(evening(energy=4), None, ("energy",))
        assert trends == {"energy": None}

    def test_default_fields_exclude_appetite_and_mood(self):
        assert TrackerConfig().trend_fields == ("energy", "cyanosis")

    async def test_history_trends_compare_with_previous_day(self, config):
        source = FakeEventSource(events={
            str(TODAY): DayEvents(evening=evening(energy=5, cyanosis=2)),
            str(TODAY.shift(-1)): DayEvents(evening=evening(energy=3, cyanosis=2)),
        })
        assembler = HistoryAssembler(source, clock=FixedClock(NOW))
        days = await assembler.build_history(3, config)

        trends = history_trends(days, config.trend_fields)

        assert trends[0] == {"energy": Trend.UP, "cyanosis": Trend.FLAT}
        assert trends[1] == {"energy": None, "cyanosis": None}
        assert trends[2] == {"energy": None, "cyanosis": None}
