"""
SCHEDULED REPORT DISPATCHER

Two recurring local-time triggers. Each firing builds one report and sends
it to every authorized recipient independently.

- Configuration is re-read on every firing (recipients, limits, child name)
- Trigger times and timezone change only through reconfigure()
- A failed recipient never stops delivery to the others
- No retries within a firing; the next scheduled firing is the retry
"""

import logging
import re
from typing import Awaitable, Callable, Optional, Protocol

import pytz
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from fluidtrack.domain.errors import DeliveryFailed, ReportGenerationFailed
from fluidtrack.domain.models import (
    DEFAULT_REPORT_TIME_1,
    DEFAULT_REPORT_TIME_2,
    DayKey,
    DeliveryResult,
    DispatchReport,
    TrackerConfig,
)
from fluidtrack.reports.daily_report import build_error_notice
from fluidtrack.utils.time import Clock, SystemClock, compute_day_key

_logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")

# job id -> (settings attribute, fallback time)
_TRIGGERS = {
    "report_1": ("report_time_1", DEFAULT_REPORT_TIME_1),
    "report_2": ("report_time_2", DEFAULT_REPORT_TIME_2),
}


class MessageSender(Protocol):
    async def send_message(self, recipient_id: int, text: str) -> Optional[DeliveryResult]:
        """
        Deliver text. Failure is either raised as DeliveryFailed or returned
        as a failed DeliveryResult; both carry a readable reason.
        """
        ...


class ReportSource(Protocol):
    async def build_report(
        self, day_key: DayKey, config: TrackerConfig, title: Optional[str] = None
    ) -> str:
        ...


ConfigProvider = Callable[[], Awaitable[TrackerConfig]]


def parse_report_time(value: Optional[str], default: str) -> tuple[int, int]:
    """
    Parse "HH:MM" into (hour, minute).

    Anything unparseable or out of range yields `default` so a bad setting
    never disables scheduling.
    """
    match = _TIME_PATTERN.match(value or "")
    if match:
        hour, minute = int(match.group(1)), int(match.group(2))
        if 0 <= hour < 24 and 0 <= minute < 60:
            return hour, minute

    _logger.warning(f"Invalid report time {value!r}, using default {default}")
    fallback = _TIME_PATTERN.match(default)
    return int(fallback.group(1)), int(fallback.group(2))


def _scheduler_timezone(name: str):
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        _logger.warning(f"Unknown timezone {name!r} for scheduler, using UTC")
        return pytz.utc


class ReportDispatcher:
    """
    Owns the report triggers and the per-firing fan-out.
    """

    def __init__(
        self,
        sender: MessageSender,
        reports: ReportSource,
        config: TrackerConfig,
        config_provider: Optional[ConfigProvider] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[AsyncIOScheduler] = None,
    ):
        self.sender = sender
        self.reports = reports
        self.config = config
        self.config_provider = config_provider
        self.clock = clock or SystemClock()
        self.scheduler = scheduler or AsyncIOScheduler()
        self.trigger_times: dict[str, tuple[int, int]] = {}

    # ------------------------------------------------------------
    # Trigger registration
    # ------------------------------------------------------------

    def register(self) -> None:
        """Register (or replace) both report jobs from the current snapshot."""
        tz = _scheduler_timezone(self.config.timezone)

        for job_id, (attr, default) in _TRIGGERS.items():
            hour, minute = parse_report_time(getattr(self.config, attr), default)
            label = f"{hour:02d}:{minute:02d}"

            self.scheduler.add_job(
                self.dispatch,
                trigger=CronTrigger(hour=hour, minute=minute, timezone=tz),
                args=[label],
                id=job_id,
                name=f"Report {label}",
                replace_existing=True,
                coalesce=True,
                max_instances=1,
                misfire_grace_time=300,
            )
            self.trigger_times[job_id] = (hour, minute)

        _logger.info(
            f"📅 Report triggers registered at "
            f"{', '.join(f'{h:02d}:{m:02d}' for h, m in self.trigger_times.values())} "
            f"(TZ: {tz.zone})"
        )

    def reconfigure(self, config: TrackerConfig) -> None:
        """Swap the configuration snapshot and re-register both triggers."""
        self.config = config
        self.register()

    def start(self) -> None:
        self.register()
        if not self.scheduler.running:
            self.scheduler.start()
        _logger.info("✅ Report dispatcher started")

    def stop(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            _logger.info("🛑 Report dispatcher stopped")

    # ------------------------------------------------------------
    # Firing
    # ------------------------------------------------------------

    async def dispatch(self, label: str) -> DispatchReport:
        """Build one report and deliver it to every authorized recipient."""
        _logger.info(f"📨 Triggering {label} report")

        config = await self._current_config()
        recipients = config.authorized_recipient_ids
        if not recipients:
            _logger.warning("No authorized recipients configured, skipping report send")
            return DispatchReport(label=label, day_key=None)

        day_key = compute_day_key(self.clock.now(), config.day_start_hour, config.timezone)

        error_notice = False
        try:
            text = await self.reports.build_report(day_key, config, title=label)
        except ReportGenerationFailed as exc:
            _logger.error(f"Error building {label} report: {exc}")
            text = build_error_notice(label, exc)
            error_notice = True
        except Exception as exc:
            _logger.exception(f"Unexpected error building {label} report")
            text = build_error_notice(label, exc)
            error_notice = True

        results = []
        for recipient_id in recipients:
            results.append(await self._deliver(recipient_id, text, label))

        report = DispatchReport(
            label=label,
            day_key=day_key,
            results=results,
            error_notice=error_notice,
        )
        _logger.info(
            f"{label} report for {day_key}: delivered to "
            f"{len(report.delivered)}/{len(results)} recipients"
        )
        return report

    async def _deliver(self, recipient_id: int, text: str, label: str) -> DeliveryResult:
        try:
            outcome = await self.sender.send_message(recipient_id, text)
        except DeliveryFailed as exc:
            _logger.error(f"Failed to send {label} report to {recipient_id}: {exc.reason}")
            return DeliveryResult.failed(recipient_id, exc.reason)
        except Exception as exc:
            _logger.error(f"Failed to send {label} report to {recipient_id}: {exc!r}")
            return DeliveryResult.failed(recipient_id, str(exc) or type(exc).__name__)

        if isinstance(outcome, DeliveryResult) and not outcome.ok:
            _logger.error(f"Failed to send {label} report to {recipient_id}: {outcome.error}")
            return outcome

        _logger.info(f"{label} report sent to {recipient_id}")
        return DeliveryResult.sent(recipient_id)

    async def _current_config(self) -> TrackerConfig:
        if self.config_provider is None:
            return self.config
        try:
            return await self.config_provider()
        except Exception as exc:
            _logger.warning(f"Could not reload settings, using registration snapshot: {exc}")
            return self.config
