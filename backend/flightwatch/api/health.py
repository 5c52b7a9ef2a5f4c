import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flightwatch.database import get_db
from flightwatch.utils.timeutil import utcnow

logger = logging.getLogger(__name__)

router = APIRouter()


def database_status(db: Session) -> str:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check could not reach the database: {e}")
        return f"unhealthy: {e}"
    return "healthy"


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Liveness check: ``status`` is "ok" or "degraded", ``timestamp`` is UTC ISO-8601."""
    database = database_status(db)
    return {
        "status": "ok" if database == "healthy" else "degraded",
        "timestamp": utcnow().isoformat(),
        "database": database,
    }
