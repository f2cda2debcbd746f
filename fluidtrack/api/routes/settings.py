"""
Settings API Routes
Read and update caregiver-editable settings
"""

import logging
import re
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from fluidtrack.api.deps import get_dispatcher
from fluidtrack.config import settings as env_settings
from fluidtrack.domain.errors import DataSourceUnavailable, InvalidConfig
from fluidtrack.domain.services.config_engine import (
    load_tracker_config,
    validate_day_start_hour,
    validate_tracker_limits,
)
from fluidtrack.infrastructure.db.database import get_db
from fluidtrack.infrastructure.db.repositories.settings_repository import SettingsRepository
from fluidtrack.scheduler.dispatcher import ReportDispatcher

logger = logging.getLogger(__name__)
router = APIRouter()

_TIME_RE = re.compile(r"^\d{1,2}:\d{2}$")


class SettingsUpdate(BaseModel):
    """Form payload; every value arrives as text"""
    child_name: Optional[str] = None
    daily_limit_ml: str
    warn_threshold_yellow: str
    warn_threshold_red: str
    day_start_hour: Optional[str] = None
    report_time_1: Optional[str] = None
    report_time_2: Optional[str] = None
    timezone: Optional[str] = None


def _as_int(value: Optional[str], message: str) -> int:
    try:
        return int((value or "").strip())
    except ValueError:
        raise InvalidConfig(message)


def _validate(payload: SettingsUpdate) -> dict[str, Optional[str]]:
    limit = _as_int(payload.daily_limit_ml, "Daily limit must be between 100 and 5000 ml")
    yellow = _as_int(payload.warn_threshold_yellow, "Warning thresholds must be between 10% and 100%")
    red = _as_int(payload.warn_threshold_red, "Warning thresholds must be between 10% and 100%")
    validate_tracker_limits(limit, yellow, red)

    values: dict[str, Optional[str]] = {
        "daily_limit_ml": str(limit),
        "warn_threshold_yellow": str(yellow),
        "warn_threshold_red": str(red),
    }

    if payload.day_start_hour:
        hour = _as_int(payload.day_start_hour, "Day start hour must be between 0 and 23")
        validate_day_start_hour(hour)
        values["day_start_hour"] = str(hour)

    for key in ("report_time_1", "report_time_2"):
        raw = getattr(payload, key)
        if raw:
            raw = raw.strip()
            hour, _, minute = raw.partition(":")
            if not _TIME_RE.match(raw) or int(hour) > 23 or int(minute) > 59:
                raise InvalidConfig(f"{key} must be a HH:MM time")
            values[key] = raw

    if payload.timezone:
        try:
            ZoneInfo(payload.timezone.strip())
        except (ZoneInfoNotFoundError, ValueError):
            raise InvalidConfig(f"Unknown timezone: {payload.timezone}")
        values["timezone"] = payload.timezone.strip()

    if payload.child_name is not None:
        values["child_name"] = payload.child_name.strip() or None

    return values


@router.get("")
async def get_settings(db: AsyncSession = Depends(get_db)):
    """Effective settings, defaults applied"""
    try:
        config = await load_tracker_config(SettingsRepository(db), env_settings)
    except DataSourceUnavailable as exc:
        return JSONResponse(status_code=503, content={"ok": False, "error": str(exc)})
    return {
        "child_name": config.child_name,
        "daily_limit_ml": config.daily_limit_ml,
        "warn_threshold_yellow": config.warn_threshold_yellow_pct,
        "warn_threshold_red": config.warn_threshold_red_pct,
        "day_start_hour": config.day_start_hour,
        "report_time_1": config.report_time_1,
        "report_time_2": config.report_time_2,
        "timezone": config.timezone,
    }


@router.post("")
async def save_settings(
    payload: SettingsUpdate,
    db: AsyncSession = Depends(get_db),
    dispatcher: Optional[ReportDispatcher] = Depends(get_dispatcher),
):
    try:
        values = _validate(payload)
    except InvalidConfig as exc:
        return JSONResponse(status_code=400, content={"ok": False, "error": str(exc)})

    repo = SettingsRepository(db)
    try:
        await repo.set_many(values)
        config = await load_tracker_config(repo, env_settings)
    except DataSourceUnavailable as exc:
        logger.error(f"Settings not saved: {exc}")
        await db.rollback()
        return JSONResponse(status_code=503, content={"ok": False, "error": str(exc)})
    logger.info("⚙️ Settings saved")

    if dispatcher is not None:
        dispatcher.reconfigure(config)

    return {"ok": True, "child_name": config.child_name}
