import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from success_tracker.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/health", tags=["Health"])

STARTED_AT = time.monotonic()


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """Liveness plus a round trip to the database."""
    start = time.perf_counter()
    now = datetime.now(timezone.utc).isoformat()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database failure: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "timestamp": now,
                "checks": {"database": {"status": "unhealthy", "error": "Connection failed"}},
            },
        )

    return {
        "status": "healthy",
        "timestamp": now,
        "uptime": round(time.monotonic() - STARTED_AT, 1),
        "checks": {"database": {"status": "healthy", "latency_ms": round((time.perf_counter() - start) * 1000, 2)}},
    }
