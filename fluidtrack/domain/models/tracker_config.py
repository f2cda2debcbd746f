from dataclasses import dataclass


DEFAULT_REPORT_TIME_1 = "19:00"
DEFAULT_REPORT_TIME_2 = "22:00"


@dataclass(frozen=True)
class TrackerConfig:
    """
    Snapshot of caregiver-editable settings plus the recipients from the
    environment. Read-only to aggregation and dispatch.
    """
    daily_limit_ml: int = 1000
    warn_threshold_yellow_pct: int = 70
    warn_threshold_red_pct: int = 90
    day_start_hour: int = 0
    timezone: str = "America/New_York"
    report_time_1: str = DEFAULT_REPORT_TIME_1
    report_time_2: str = DEFAULT_REPORT_TIME_2
    authorized_recipient_ids: tuple[int, ...] = ()
    trend_fields: tuple[str, ...] = ("energy", "cyanosis")
    child_name: str = "Child"
