"""
History API Routes
Day summaries for the history dashboard
"""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from fluidtrack.api.deps import get_clock, get_event_repository
from fluidtrack.config import settings
from fluidtrack.domain.errors import DataSourceUnavailable, InvalidConfig
from fluidtrack.domain.services.config_engine import load_tracker_config
from fluidtrack.domain.services.history_assembler import HistoryAssembler, history_trends
from fluidtrack.infrastructure.db.database import get_db
from fluidtrack.infrastructure.db.repositories.event_repository import EventRepository
from fluidtrack.infrastructure.db.repositories.settings_repository import SettingsRepository
from fluidtrack.utils.time import Clock

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def get_history(
    days: int = Query(7, ge=1, le=settings.HISTORY_MAX_DAYS),
    db: AsyncSession = Depends(get_db),
    events: EventRepository = Depends(get_event_repository),
    clock: Clock = Depends(get_clock),
):
    """
    Last `days` logical days, today first.

    Each day carries `trends`: evening score direction versus the previous
    day for the configured trend fields.
    """
    try:
        config = await load_tracker_config(SettingsRepository(db), settings)
        assembler = HistoryAssembler(events, clock=clock)
        summaries = await assembler.build_history(days, config)
    except DataSourceUnavailable as exc:
        logger.error(f"History unavailable: {exc}")
        return JSONResponse(status_code=503, content={"ok": False, "error": str(exc)})
    except InvalidConfig as exc:
        return JSONResponse(status_code=400, content={"ok": False, "error": str(exc)})

    trends = history_trends(summaries, config.trend_fields)

    payload = []
    for summary, day_trends in zip(summaries, trends):
        item = summary.to_dict()
        item["trends"] = {name: t.value if t else None for name, t in day_trends.items()}
        payload.append(item)

    return {"ok": True, "days": payload}
