"""
HISTORY ASSEMBLER
Consecutive DaySummary values for the history dashboard, today first.

Fetches are all-or-nothing: one failed day fails the whole call so the
dashboard never shows a misleading partial week.
"""

import dataclasses
import logging
from typing import Optional, Protocol, Sequence

from fluidtrack.domain.errors import DataSourceUnavailable
from fluidtrack.domain.models import (
    DayEvents,
    DayKey,
    DaySummary,
    TrackerConfig,
    Trend,
    WellnessCheck,
)
from fluidtrack.domain.services.day_aggregator import DayAggregator
from fluidtrack.utils.time import Clock, SystemClock, compute_day_key

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    async def get_events_for_day(self, day_key: DayKey) -> DayEvents:
        ...


class HistoryAssembler:
    def __init__(
        self,
        source: EventSource,
        aggregator: Optional[DayAggregator] = None,
        clock: Optional[Clock] = None,
    ):
        self.source = source
        self.aggregator = aggregator or DayAggregator()
        self.clock = clock or SystemClock()

    def today_key(self, config: TrackerConfig) -> DayKey:
        return compute_day_key(self.clock.now(), config.day_start_hour, config.timezone)

    async def build_history(self, days: int, config: TrackerConfig) -> list[DaySummary]:
        """
        Summaries for `days` logical days ending today, most recent first.

        Raises:
            ValueError: days < 1
            DataSourceUnavailable: any day's events could not be fetched
        """
        if days < 1:
            raise ValueError("days must be at least 1")

        today = self.today_key(config)
        summaries = []
        for offset in range(days):
            key = today.shift(-offset)
            events = await self._fetch(key)
            summary = self.aggregator.summarize(key, events, config, is_today=offset == 0)
            if offset > 0 and summary.is_empty:
                summary = dataclasses.replace(summary, collapsed=True)
            summaries.append(summary)

        return summaries

    async def _fetch(self, key: DayKey) -> DayEvents:
        try:
            return await self.source.get_events_for_day(key)
        except DataSourceUnavailable:
            raise
        except Exception as exc:
            logger.exception(f"Event fetch failed for {key}")
            raise DataSourceUnavailable(f"Could not load events for {key}") from exc


def compare_trend(current: Optional[int], previous: Optional[int]) -> Optional[Trend]:
    """UP, DOWN or FLAT; None when either value is missing."""
    if current is None or previous is None:
        return None
    if current > previous:
        return Trend.UP
    if current < previous:
        return Trend.DOWN
    return Trend.FLAT


def evening_trends(
    current: Optional[WellnessCheck],
    previous: Optional[WellnessCheck],
    fields: Sequence[str],
) -> dict[str, Optional[Trend]]:
    """Per-field trend of one evening check against the prior day's."""
    return {
        name: compare_trend(
            current.score(name) if current else None,
            previous.score(name) if previous else None,
        )
        for name in fields
    }


def history_trends(
    days: Sequence[DaySummary],
    fields: Sequence[str],
) -> list[dict[str, Optional[Trend]]]:
    """
    Trends for a today-first history: day i is compared with day i + 1.
    The oldest day has nothing to compare with, so all its trends are None.
    """
    trends = []
    for index, day in enumerate(days):
        previous = days[index + 1].evening if index + 1 < len(days) else None
        trends.append(evening_trends(day.evening, previous, fields))
    return trends
