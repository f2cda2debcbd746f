from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fluidtrack.api.deps import get_clock
from fluidtrack.api.routes import events, health, history, report, settings as settings_routes
from fluidtrack.domain.models import TrackerConfig
from fluidtrack.infrastructure.db import models  # noqa: F401
from fluidtrack.infrastructure.db.database import Base, get_db
from fluidtrack.infrastructure.db.repositories.settings_repository import SettingsRepository
from fakes import FixedClock

# Sat Oct 17 2026, 8:00 PM in New York
NOW = datetime(2026, 10, 18, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def tracker_config() -> TrackerConfig:
    return TrackerConfig(
        daily_limit_ml=1000,
        warn_threshold_yellow_pct=70,
        warn_threshold_red_pct=90,
        day_start_hour=0,
        timezone="America/New_York",
        authorized_recipient_ids=(101, 202, 303),
        child_name="Maya",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        await SettingsRepository(session).set_many({
            "timezone": "America/New_York",
            "day_start_hour": "0",
            "daily_limit_ml": "1000",
            "warn_threshold_yellow": "70",
            "warn_threshold_red": "90",
            "child_name": "Maya",
        })
        await session.commit()
        yield session


@pytest.fixture
async def app(db_session, clock) -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, tags=["Health"])
    app.include_router(history.router, prefix="/api/history", tags=["History"])
    app.include_router(report.router, prefix="/api/report", tags=["Report"])
    app.include_router(settings_routes.router, prefix="/api/settings", tags=["Settings"])
    app.include_router(events.router, prefix="/api/log", tags=["Event Log"])

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.state.dispatcher = None

    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
