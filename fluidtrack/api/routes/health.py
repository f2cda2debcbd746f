from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fluidtrack.infrastructure.db.database import get_db

router = APIRouter()


@router.get("/health")
async def health(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        await db.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError:
        db_status = "error"

    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        scheduler_status = "disabled"
    else:
        scheduler_status = "running" if dispatcher.scheduler.running else "stopped"

    jobs = []
    if dispatcher is not None:
        jobs = [
            {"id": job_id, "time": f"{hour:02d}:{minute:02d}"}
            for job_id, (hour, minute) in dispatcher.trigger_times.items()
        ]

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "services": {"database": db_status, "scheduler": scheduler_status},
        "report_triggers": jobs,
    }
