from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session
from typing import Optional

from success_tracker import datekey
from success_tracker.config import MAX_LOG_AGE_DAYS, NOTE_MAX_LENGTH
from success_tracker.database import get_db
from success_tracker.dependencies import reader, writer
from success_tracker.services.log_store import LogStore

router = APIRouter(prefix="/api/v1/logs", tags=["Logs"])


class LogDayRequest(BaseModel):
    outcome: bool
    day: Optional[str] = None  # YYYY-MM-DD, defaults to today
    note: Optional[str] = Field(None, max_length=NOTE_MAX_LENGTH)


@router.get("")
def list_logs(user_id: int = Depends(reader), db: Session = Depends(get_db)):
    return {"logs": [l.to_dict() for l in LogStore.list_active(db, user_id)]}


@router.get("/today")
def today_status(user_id: int = Depends(reader), db: Session = Depends(get_db)):
    log = LogStore.get_active_for_day(db, user_id, datekey.today())
    return {
        "has_logged_today": log is not None,
        "today_log": log.to_dict() if log else None,
    }


@router.get("/export")
def export_logs(user_id: int = Depends(reader), db: Session = Depends(get_db)):
    return LogStore.export(db, user_id)


@router.post("")
def log_day(body: LogDayRequest, response: Response, user_id: int = Depends(writer), db: Session = Depends(get_db)):
    day = datekey.validate_log_day(body.day, max_age_days=MAX_LOG_AGE_DAYS)
    log, action = LogStore.upsert_with_retry(db, user_id, day, body.outcome, body.note)
    if action == "created":
        response.status_code = status.HTTP_201_CREATED
    return {"log": log.to_dict(), "action": action}


@router.delete("/{log_id}")
def delete_log(log_id: int, user_id: int = Depends(writer), db: Session = Depends(get_db)):
    log = LogStore.soft_delete(db, user_id, log_id)
    return {"log": log.to_dict(), "action": "deleted"}


@router.post("/{log_id}/restore")
def restore_log(log_id: int, user_id: int = Depends(writer), db: Session = Depends(get_db)):
    log = LogStore.restore(db, user_id, log_id)
    return {"log": log.to_dict(), "action": "restored"}
