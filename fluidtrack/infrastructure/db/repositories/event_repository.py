"""
Event Repository
Append-only tracker events, queried by logical day
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fluidtrack.domain.errors import DataSourceUnavailable
from fluidtrack.domain.models import (
    DayEvents,
    DayKey,
    GagEvent,
    IntakeEvent,
    IntakeFluid,
    OutputEvent,
    OutputFluid,
    WellnessCheck,
    WellnessSlot,
)
from fluidtrack.infrastructure.db.models import (
    GagLogModel,
    IntakeLogModel,
    OutputLogModel,
    WellnessCheckModel,
)


def _to_db_time(dt: datetime) -> datetime:
    """Store as naive UTC."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _from_db_time(dt: datetime) -> datetime:
    return dt.replace(tzinfo=timezone.utc)


class EventRepository:
    """Repository for intake, output, gag and wellness rows"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record_intake(
        self,
        day_key: DayKey,
        fluid_type: IntakeFluid,
        amount_ml: int,
        logged_at: datetime,
    ) -> int:
        if amount_ml <= 0:
            raise ValueError("Intake amount must be positive")
        model = IntakeLogModel(
            day_key=str(day_key),
            logged_at=_to_db_time(logged_at),
            fluid_type=fluid_type,
            amount_ml=amount_ml,
        )
        self.session.add(model)
        await self.session.flush()
        return model.id

    async def record_output(
        self,
        day_key: DayKey,
        fluid_type: OutputFluid,
        logged_at: datetime,
        amount_ml: Optional[int] = None,
    ) -> int:
        model = OutputLogModel(
            day_key=str(day_key),
            logged_at=_to_db_time(logged_at),
            fluid_type=fluid_type,
            amount_ml=amount_ml,
        )
        self.session.add(model)
        await self.session.flush()
        return model.id

    async def record_gag(self, day_key: DayKey, logged_at: datetime) -> int:
        model = GagLogModel(day_key=str(day_key), logged_at=_to_db_time(logged_at))
        self.session.add(model)
        await self.session.flush()
        return model.id

    async def upsert_wellness(
        self,
        day_key: DayKey,
        check: WellnessCheck,
        logged_at: datetime,
    ) -> int:
        """Insert the check, or overwrite the existing one for (day, slot)."""
        result = await self.session.execute(
            select(WellnessCheckModel).where(
                WellnessCheckModel.day_key == str(day_key),
                WellnessCheckModel.slot == check.slot,
            )
        )
        model = result.scalars().first()
        if model is None:
            model = WellnessCheckModel(day_key=str(day_key), slot=check.slot)
            self.session.add(model)

        model.appetite = check.appetite
        model.energy = check.energy
        model.mood = check.mood
        model.cyanosis = check.cyanosis
        model.logged_at = _to_db_time(logged_at)

        await self.session.flush()
        return model.id

    async def get_events_for_day(self, day_key: DayKey) -> DayEvents:
        """
        All events for one logical day. Empty collections for an empty day.

        Raises:
            DataSourceUnavailable: the database could not be queried
        """
        key = str(day_key)
        try:
            intake_rows = await self._rows(IntakeLogModel, key)
            output_rows = await self._rows(OutputLogModel, key)
            gag_rows = await self._rows(GagLogModel, key)

            result = await self.session.execute(
                select(WellnessCheckModel).where(WellnessCheckModel.day_key == key)
            )
            wellness_rows = result.scalars().all()
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable(f"Could not load events for {key}") from exc

        checks = {row.slot: self._to_check(row) for row in wellness_rows}

        return DayEvents(
            intake=[
                IntakeEvent(
                    logged_at=_from_db_time(r.logged_at),
                    fluid_type=r.fluid_type,
                    amount_ml=r.amount_ml,
                )
                for r in intake_rows
            ],
            outputs=[
                OutputEvent(
                    logged_at=_from_db_time(r.logged_at),
                    fluid_type=r.fluid_type,
                    amount_ml=r.amount_ml,
                )
                for r in output_rows
            ],
            gags=[GagEvent(logged_at=_from_db_time(r.logged_at)) for r in gag_rows],
            afternoon=checks.get(WellnessSlot.AFTERNOON),
            evening=checks.get(WellnessSlot.EVENING),
        )

    async def _rows(self, model, key: str) -> list:
        result = await self.session.execute(
            select(model).where(model.day_key == key).order_by(model.logged_at, model.id)
        )
        return list(result.scalars().all())

    @staticmethod
    def _to_check(row: WellnessCheckModel) -> WellnessCheck:
        return WellnessCheck(
            slot=row.slot,
            appetite=row.appetite,
            energy=row.energy,
            mood=row.mood,
            cyanosis=row.cyanosis,
            logged_at=_from_db_time(row.logged_at),
        )


class SessionScopedEventSource:
    """Event source that opens a fresh session per call (for scheduled jobs)."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def get_events_for_day(self, day_key: DayKey) -> DayEvents:
        try:
            async with self.session_factory() as session:
                return await EventRepository(session).get_events_for_day(day_key)
        except SQLAlchemyError as exc:
            raise DataSourceUnavailable(f"Could not open a database session: {exc}") from exc
