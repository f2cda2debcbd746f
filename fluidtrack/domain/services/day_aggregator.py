"""
DAY AGGREGATOR
Roll one logical day's raw events up into a DaySummary

RULES:
✅ Pure calculation, no I/O
✅ Deterministic output
✅ Empty event sets produce an all-zero summary
"""

from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP

from fluidtrack.domain.errors import InvalidConfig
from fluidtrack.domain.models import (
    DayEvents,
    DayKey,
    DaySummary,
    IntakeEvent,
    IntakeSeverity,
    IntakeSummary,
    OutputEntry,
    OutputEvent,
    TrackerConfig,
)
from fluidtrack.utils.time import format_clock_time, to_local


class DayAggregator:
    """
    Day Aggregator
    Summarizes a day, does NOT fetch data
    """

    def summarize(
        self,
        day_key: DayKey,
        events: DayEvents,
        config: TrackerConfig,
        is_today: bool = False,
    ) -> DaySummary:
        """
        Summarize one day's events

        Args:
            day_key: Logical day being summarized
            events: Raw events already filtered to that day
            config: Tracker settings snapshot
            is_today: Whether the day is the current logical day

        Returns:
            DaySummary

        Raises:
            InvalidConfig: daily limit is not positive
        """
        if config.daily_limit_ml <= 0:
            raise InvalidConfig("daily_limit_ml must be positive")

        intake = self._summarize_intake(events.intake, config)
        outputs = self._project_outputs(events.outputs, config.timezone)

        return DaySummary(
            day_key=day_key,
            label=day_key.label,
            is_today=is_today,
            intake=intake,
            outputs=outputs,
            gag_count=len(events.gags),
            afternoon=events.afternoon,
            evening=events.evening,
        )

    def _summarize_intake(
        self,
        intake: list[IntakeEvent],
        config: TrackerConfig,
    ) -> IntakeSummary:
        by_type: dict[str, int] = defaultdict(int)
        for event in intake:
            by_type[event.fluid_type.value] += event.amount_ml

        total_ml = sum(by_type.values())
        limit_ml = config.daily_limit_ml
        raw_percent = self.calculate_percent(total_ml, limit_ml)

        return IntakeSummary(
            total_ml=total_ml,
            limit_ml=limit_ml,
            percent=min(raw_percent, 100),
            raw_percent=raw_percent,
            severity=self.classify_intake(
                total_ml=total_ml,
                limit_ml=limit_ml,
                percent=raw_percent,
                yellow_pct=config.warn_threshold_yellow_pct,
                red_pct=config.warn_threshold_red_pct,
            ),
            by_type=dict(by_type),
        )

    @staticmethod
    def calculate_percent(total_ml: int, limit_ml: int) -> int:
        """
        Whole percent of the limit, rounded half up

        Formula: round(100 * total / limit), 0 when limit is not positive
        """
        if limit_ml <= 0:
            return 0
        pct = (Decimal(total_ml) * Decimal(100)) / Decimal(limit_ml)
        return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @staticmethod
    def classify_intake(
        total_ml: int,
        limit_ml: int,
        percent: int,
        yellow_pct: int,
        red_pct: int,
    ) -> IntakeSeverity:
        """
        Classify intake against the thresholds

        Logic:
        - OVER: total strictly above the limit, whatever the percent says
        - RED: percent >= red threshold
        - YELLOW: percent >= yellow threshold
        - NORMAL: otherwise
        """
        if total_ml > limit_ml:
            return IntakeSeverity.OVER
        if percent >= red_pct:
            return IntakeSeverity.RED
        if percent >= yellow_pct:
            return IntakeSeverity.YELLOW
        return IntakeSeverity.NORMAL

    @staticmethod
    def _project_outputs(outputs: list[OutputEvent], timezone: str) -> list[OutputEntry]:
        ordered = sorted(outputs, key=lambda o: to_local(o.logged_at, "UTC"))
        return [
            OutputEntry(
                time=format_clock_time(o.logged_at, timezone),
                fluid_type=o.fluid_type.value,
                amount_ml=o.amount_ml,
                logged_at=to_local(o.logged_at, timezone).isoformat(),
            )
            for o in ordered
        ]
