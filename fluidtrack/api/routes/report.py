import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from fluidtrack.api.deps import get_clock, get_dispatcher, get_event_repository
from fluidtrack.config import settings
from fluidtrack.domain.errors import DataSourceUnavailable, ReportGenerationFailed
from fluidtrack.domain.services.config_engine import load_tracker_config
from fluidtrack.infrastructure.db.database import get_db
from fluidtrack.infrastructure.db.repositories.event_repository import EventRepository
from fluidtrack.infrastructure.db.repositories.settings_repository import SettingsRepository
from fluidtrack.reports.daily_report import ReportBuilder
from fluidtrack.scheduler.dispatcher import ReportDispatcher
from fluidtrack.utils.time import Clock, compute_day_key

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/today",
    summary="Today's report",
    description="The text a scheduled report would contain right now",
)
async def today_report(
    db: AsyncSession = Depends(get_db),
    events: EventRepository = Depends(get_event_repository),
    clock: Clock = Depends(get_clock),
):
    try:
        config = await load_tracker_config(SettingsRepository(db), settings)
        day_key = compute_day_key(clock.now(), config.day_start_hour, config.timezone)
        text = await ReportBuilder(events).build_report(day_key, config)
    except (DataSourceUnavailable, ReportGenerationFailed) as exc:
        logger.error(f"Report unavailable: {exc}")
        return JSONResponse(status_code=503, content={"ok": False, "error": str(exc)})
    return {"ok": True, "day_key": str(day_key), "report": text}


@router.post(
    "/send",
    summary="Send a report now",
    description="Run one dispatch outside the schedule",
)
async def send_report(
    label: Optional[str] = Query(None, max_length=40),
    dispatcher: Optional[ReportDispatcher] = Depends(get_dispatcher),
):
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="Report dispatcher is not running")

    result = await dispatcher.dispatch(label or "manual")
    return {"ok": True, **result.to_dict()}
