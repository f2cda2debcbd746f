"""
Event logging routes
Each event is filed under the logical day of its timestamp
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from fluidtrack.api.deps import get_clock, get_event_repository, get_tracker_config
from fluidtrack.domain.models import (
    IntakeFluid,
    OutputFluid,
    TrackerConfig,
    WellnessCheck,
    WellnessSlot,
)
from fluidtrack.infrastructure.db.repositories.event_repository import EventRepository
from fluidtrack.utils.time import Clock, compute_day_key

router = APIRouter()


class IntakeIn(BaseModel):
    fluid_type: IntakeFluid
    amount_ml: int = Field(..., gt=0, le=5000)
    logged_at: Optional[datetime] = None


class OutputIn(BaseModel):
    fluid_type: OutputFluid
    amount_ml: Optional[int] = Field(None, gt=0, le=5000)
    logged_at: Optional[datetime] = None


class GagIn(BaseModel):
    logged_at: Optional[datetime] = None


class WellnessIn(BaseModel):
    slot: WellnessSlot
    appetite: Optional[int] = Field(None, ge=0, le=10)
    energy: Optional[int] = Field(None, ge=0, le=10)
    mood: Optional[int] = Field(None, ge=0, le=10)
    cyanosis: Optional[int] = Field(None, ge=0, le=10)
    logged_at: Optional[datetime] = None


def _stamp(logged_at: Optional[datetime], config: TrackerConfig, clock: Clock):
    when = logged_at or clock.now()
    return when, compute_day_key(when, config.day_start_hour, config.timezone)


@router.post("/intake", status_code=201)
async def log_intake(
    body: IntakeIn,
    config: TrackerConfig = Depends(get_tracker_config),
    events: EventRepository = Depends(get_event_repository),
    clock: Clock = Depends(get_clock),
):
    when, day_key = _stamp(body.logged_at, config, clock)
    event_id = await events.record_intake(day_key, body.fluid_type, body.amount_ml, when)
    return {"ok": True, "id": event_id, "day_key": str(day_key)}


@router.post("/output", status_code=201)
async def log_output(
    body: OutputIn,
    config: TrackerConfig = Depends(get_tracker_config),
    events: EventRepository = Depends(get_event_repository),
    clock: Clock = Depends(get_clock),
):
    when, day_key = _stamp(body.logged_at, config, clock)
    event_id = await events.record_output(day_key, body.fluid_type, when, body.amount_ml)
    return {"ok": True, "id": event_id, "day_key": str(day_key)}


@router.post("/gag", status_code=201)
async def log_gag(
    body: GagIn,
    config: TrackerConfig = Depends(get_tracker_config),
    events: EventRepository = Depends(get_event_repository),
    clock: Clock = Depends(get_clock),
):
    when, day_key = _stamp(body.logged_at, config, clock)
    event_id = await events.record_gag(day_key, when)
    return {"ok": True, "id": event_id, "day_key": str(day_key)}


@router.post("/wellness", status_code=201)
async def log_wellness(
    body: WellnessIn,
    config: TrackerConfig = Depends(get_tracker_config),
    events: EventRepository = Depends(get_event_repository),
    clock: Clock = Depends(get_clock),
):
    when, day_key = _stamp(body.logged_at, config, clock)
    check = WellnessCheck(
        slot=body.slot,
        appetite=body.appetite,
        energy=body.energy,
        mood=body.mood,
        cyanosis=body.cyanosis,
    )
    check_id = await events.upsert_wellness(day_key, check, when)
    return {"ok": True, "id": check_id, "day_key": str(day_key)}
