from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from success_tracker.database import get_db
from success_tracker.dependencies import reader
from success_tracker.services.log_store import LogStore
from success_tracker.services.insight_service import summarize
from success_tracker.services.trend_service import rolling_win_rate, recent_days

router = APIRouter(prefix="/api/v1/insights", tags=["Insights"])


@router.get("")
def get_insights(user_id: int = Depends(reader), db: Session = Depends(get_db)):
    """Streaks, weekly trend, success rate and the motivational message."""
    return summarize(LogStore.list_active(db, user_id))


@router.get("/trend")
def get_trend(days: int = Query(30, ge=1, le=365), user_id: int = Depends(reader), db: Session = Depends(get_db)):
    """Running win rate for each of the last `days` days."""
    return {"days": days, "points": rolling_win_rate(LogStore.list_active(db, user_id), window_days=days)}


@router.get("/recent")
def get_recent(days: int = Query(7, ge=1, le=31), user_id: int = Depends(reader), db: Session = Depends(get_db)):
    return {"days": recent_days(LogStore.list_active(db, user_id), days=days)}
