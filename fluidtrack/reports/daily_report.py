"""
REPORTING: DAILY REPORT

Plain-text caregiver report for one logical day.
"""

import logging
from typing import Optional

from fluidtrack.domain.errors import ReportGenerationFailed
from fluidtrack.domain.models import (
    DayKey,
    DaySummary,
    IntakeSeverity,
    TrackerConfig,
    WellnessCheck,
    fluid_label,
)
from fluidtrack.domain.services.day_aggregator import DayAggregator
from fluidtrack.domain.services.history_assembler import EventSource

logger = logging.getLogger(__name__)

MISSING_VALUE = "—"

_SEVERITY_LINES = {
    IntakeSeverity.OVER: "🚨 Over the daily limit!",
    IntakeSeverity.RED: "🔴 Red threshold reached ({pct}%+)",
    IntakeSeverity.YELLOW: "🟡 Yellow threshold reached ({pct}%+)",
}


def format_score(value: Optional[int]) -> str:
    """Render a wellness score; only a missing value becomes a dash."""
    return MISSING_VALUE if value is None else str(value)


def render_report(summary: DaySummary, config: TrackerConfig, title: Optional[str] = None) -> str:
    heading = f"📋 {config.child_name} report"
    if title:
        heading += f" ({title})"

    lines = [heading, f"📅 {summary.label}", ""]

    intake = summary.intake
    lines.append(
        f"💧 Intake: {intake.total_ml} / {intake.limit_ml} ml ({intake.raw_percent}%)"
    )
    for fluid_type, ml in intake.by_type.items():
        if ml > 0:
            lines.append(f"   • {fluid_label(fluid_type)}: {ml} ml")

    severity_line = _SEVERITY_LINES.get(intake.severity)
    if severity_line:
        pct = (
            config.warn_threshold_red_pct
            if intake.severity == IntakeSeverity.RED
            else config.warn_threshold_yellow_pct
        )
        lines.append(severity_line.format(pct=pct))

    lines.append("")
    if summary.outputs:
        counts: dict[str, int] = {}
        for entry in summary.outputs:
            counts[entry.fluid_type] = counts.get(entry.fluid_type, 0) + 1
        breakdown = ", ".join(f"{fluid_label(t)} {n}" for t, n in counts.items())
        lines.append(f"🚽 Outputs: {len(summary.outputs)} ({breakdown})")
    else:
        lines.append("🚽 Outputs: none logged")

    plural = "" if summary.gag_count == 1 else "s"
    lines.append(f"🤢 Gags: {summary.gag_count} episode{plural}")

    lines.append("")
    lines.append(_render_wellness(summary.evening, summary.afternoon))

    return "\n".join(lines)


def _render_wellness(evening: Optional[WellnessCheck], afternoon: Optional[WellnessCheck]) -> str:
    check = evening or afternoon
    if check is None:
        return "❤️ Wellness: no check logged"

    return (
        f"❤️ Wellness ({check.slot.value}): "
        f"Appetite {format_score(check.appetite)} · "
        f"Energy {format_score(check.energy)} · "
        f"Mood {format_score(check.mood)} · "
        f"Cyanosis {format_score(check.cyanosis)}"
    )


def build_error_notice(label: str, error: Exception) -> str:
    return f"❌ Error generating {label} report: {error}"


class ReportBuilder:
    """Fetch one day's events and render the report text."""

    def __init__(self, source: EventSource, aggregator: Optional[DayAggregator] = None):
        self.source = source
        self.aggregator = aggregator or DayAggregator()

    async def build_report(
        self,
        day_key: DayKey,
        config: TrackerConfig,
        title: Optional[str] = None,
    ) -> str:
        """
        Raises:
            ReportGenerationFailed: events could not be loaded or summarized
        """
        try:
            events = await self.source.get_events_for_day(day_key)
            summary = self.aggregator.summarize(day_key, events, config, is_today=True)
            return render_report(summary, config, title)
        except Exception as exc:
            logger.exception(f"Report generation failed for {day_key}")
            raise ReportGenerationFailed(str(exc) or type(exc).__name__) from exc
