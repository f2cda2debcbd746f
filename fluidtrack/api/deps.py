"""Shared FastAPI dependencies."""

from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fluidtrack.config import settings
from fluidtrack.domain.errors import DataSourceUnavailable
from fluidtrack.domain.models import TrackerConfig
from fluidtrack.domain.services.config_engine import load_tracker_config
from fluidtrack.infrastructure.db.database import get_db
from fluidtrack.infrastructure.db.repositories.event_repository import EventRepository
from fluidtrack.infrastructure.db.repositories.settings_repository import SettingsRepository
from fluidtrack.scheduler.dispatcher import ReportDispatcher
from fluidtrack.utils.time import Clock, SystemClock

_system_clock = SystemClock()


def get_clock() -> Clock:
    return _system_clock


async def get_tracker_config(db: AsyncSession = Depends(get_db)) -> TrackerConfig:
    try:
        return await load_tracker_config(SettingsRepository(db), settings)
    except DataSourceUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc))


def get_event_repository(db: AsyncSession = Depends(get_db)) -> EventRepository:
    return EventRepository(db)


def get_dispatcher(request: Request) -> Optional[ReportDispatcher]:
    return getattr(request.app.state, "dispatcher", None)
