"""
FastAPI Main Application with Report Dispatcher
Wires the event store, settings, Telegram sender and scheduled reports
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging

from fastapi import FastAPI

from fluidtrack.config import settings
from fluidtrack.core.logging import setup_logging
from fluidtrack.domain.models import TrackerConfig
from fluidtrack.domain.services.config_engine import load_tracker_config
from fluidtrack.infrastructure.db.database import async_session_factory, close_db, init_db
from fluidtrack.infrastructure.db.repositories.event_repository import SessionScopedEventSource
from fluidtrack.infrastructure.db.repositories.settings_repository import SettingsRepository
from fluidtrack.reports.daily_report import ReportBuilder
from fluidtrack.scheduler.dispatcher import ReportDispatcher
from fluidtrack.telegram.sender import TelegramMessageSender
from fluidtrack.utils.logging_redaction import install_redaction_filter

setup_logging(settings.LOG_LEVEL)
install_redaction_filter()
logger = logging.getLogger(__name__)


async def load_current_config() -> TrackerConfig:
    """Fresh settings snapshot in its own session."""
    async with async_session_factory() as session:
        return await load_tracker_config(SettingsRepository(session), settings)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown of all services
    """
    logger.info("🚀 Starting FluidTrack")

    await init_db()
    logger.info("✅ Database initialized")

    sender = None
    dispatcher = None
    app.state.dispatcher = None

    if settings.TELEGRAM_ENABLED and settings.TELEGRAM_BOT_TOKEN:
        sender = TelegramMessageSender(settings.TELEGRAM_BOT_TOKEN)
        await sender.start()
    else:
        logger.info("📱 Telegram disabled, scheduled reports will not be sent")

    if sender is not None and settings.SCHEDULER_ENABLED:
        config = await load_current_config()
        dispatcher = ReportDispatcher(
            sender=sender,
            reports=ReportBuilder(SessionScopedEventSource(async_session_factory)),
            config=config,
            config_provider=load_current_config,
        )
        dispatcher.start()
        app.state.dispatcher = dispatcher
    else:
        logger.info("⏰ Report dispatcher disabled")

    yield

    logger.info("🛑 Shutting down FluidTrack")
    if dispatcher:
        dispatcher.stop()
    if sender:
        await sender.stop()
    await close_db()
    logger.info("👋 Shutdown complete")


app = FastAPI(
    title="FluidTrack",
    description="Fluid intake and output tracking with scheduled caregiver reports",
    version="1.0.0",
    lifespan=lifespan,
)


from fluidtrack.api.routes import events, health, history, report, settings as settings_routes  # noqa: E402

app.include_router(health.router, tags=["Health"])
app.include_router(history.router, prefix="/api/history", tags=["History"])
app.include_router(report.router, prefix="/api/report", tags=["Report"])
app.include_router(settings_routes.router, prefix="/api/settings", tags=["Settings"])
app.include_router(events.router, prefix="/api/log", tags=["Event Log"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("fluidtrack.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
