"""
CONFIG ENGINE
Builds the TrackerConfig snapshot from stored settings and environment.

RESPONSIBILITIES:
- Apply documented defaults for absent settings
- Parse stored strings (the settings form stores everything as text)
- Validate limits and thresholds at the boundary
"""

import logging
from typing import Iterable, Optional, Protocol

from fluidtrack.config import Settings
from fluidtrack.domain.errors import InvalidConfig
from fluidtrack.domain.models import (
    DEFAULT_REPORT_TIME_1,
    DEFAULT_REPORT_TIME_2,
    WELLNESS_FIELDS,
    TrackerConfig,
)

logger = logging.getLogger(__name__)

DAILY_LIMIT_RANGE = (100, 5000)
THRESHOLD_RANGE = (10, 100)

# Setting keys as stored by the settings form
SETTING_KEYS = (
    "child_name",
    "daily_limit_ml",
    "day_start_hour",
    "warn_threshold_yellow",
    "warn_threshold_red",
    "report_time_1",
    "report_time_2",
    "timezone",
)


class SettingsSource(Protocol):
    async def get_all(self) -> dict[str, Optional[str]]:
        ...


def parse_recipient_ids(raw: Optional[str]) -> tuple[int, ...]:
    """
    Parse a comma-separated list of chat ids.

    Blank entries are dropped; entries that are not integers are dropped with
    a warning.
    """
    ids = []
    for part in (raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.append(int(part))
        except ValueError:
            logger.warning(f"Ignoring non-numeric recipient id {part!r}")
    return tuple(ids)


def parse_trend_fields(raw: Optional[str]) -> tuple[str, ...]:
    fields = []
    for part in (raw or "").split(","):
        name = part.strip().lower()
        if not name:
            continue
        if name not in WELLNESS_FIELDS:
            logger.warning(f"Ignoring unknown trend field {name!r}")
            continue
        fields.append(name)
    return tuple(fields)


def validate_tracker_limits(daily_limit_ml: int, yellow_pct: int, red_pct: int) -> None:
    """
    Enforce limit and threshold invariants.

    Raises:
        InvalidConfig: limit outside 100..5000, a threshold outside 10..100,
            or yellow not strictly below red.
    """
    low, high = DAILY_LIMIT_RANGE
    if not low <= daily_limit_ml <= high:
        raise InvalidConfig(f"Daily limit must be between {low} and {high} ml")

    low, high = THRESHOLD_RANGE
    if not (low <= yellow_pct <= high and low <= red_pct <= high):
        raise InvalidConfig(f"Warning thresholds must be between {low}% and {high}%")

    if yellow_pct >= red_pct:
        raise InvalidConfig("Yellow threshold must be less than red threshold")


def validate_day_start_hour(hour: int) -> None:
    if not 0 <= hour <= 23:
        raise InvalidConfig("Day start hour must be between 0 and 23")


def _int_setting(values: dict, key: str, default: int) -> int:
    raw = values.get(key)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        logger.warning(f"Setting {key}={raw!r} is not a number, using default {default}")
        return default


def build_tracker_config(values: dict, env: Settings) -> TrackerConfig:
    """Build a snapshot from a key -> raw string mapping."""
    defaults = TrackerConfig()

    day_start_hour = _int_setting(values, "day_start_hour", defaults.day_start_hour)
    if not 0 <= day_start_hour <= 23:
        logger.warning(f"day_start_hour={day_start_hour} out of range, using {defaults.day_start_hour}")
        day_start_hour = defaults.day_start_hour

    return TrackerConfig(
        daily_limit_ml=_int_setting(values, "daily_limit_ml", defaults.daily_limit_ml),
        warn_threshold_yellow_pct=_int_setting(
            values, "warn_threshold_yellow", defaults.warn_threshold_yellow_pct
        ),
        warn_threshold_red_pct=_int_setting(
            values, "warn_threshold_red", defaults.warn_threshold_red_pct
        ),
        day_start_hour=day_start_hour,
        timezone=values.get("timezone") or env.TZ,
        report_time_1=values.get("report_time_1") or DEFAULT_REPORT_TIME_1,
        report_time_2=values.get("report_time_2") or DEFAULT_REPORT_TIME_2,
        authorized_recipient_ids=parse_recipient_ids(env.AUTHORIZED_USER_IDS),
        trend_fields=parse_trend_fields(env.TREND_FIELDS),
        child_name=values.get("child_name") or defaults.child_name,
    )


async def load_tracker_config(
    source: SettingsSource,
    env: Settings,
    keys: Iterable[str] = SETTING_KEYS,
) -> TrackerConfig:
    """Read the stored settings in one call and build a snapshot from `keys`."""
    stored = await source.get_all()
    return build_tracker_config({key: stored.get(key) for key in keys}, env)
