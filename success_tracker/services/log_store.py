"""
log_store.py — Day logs: one win/loss per user per calendar day
Re-logging a day overwrites it in place (reviving a soft-deleted row), deletes
are tombstones that can be restored, and reads only ever see live rows.
"""

import logging
from datetime import datetime, timezone, date

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from success_tracker import datekey
from success_tracker.config import NOTE_MAX_LENGTH
from success_tracker.errors import DuplicateConflict, NotFound, NoteTooLong
from success_tracker.models.day_log import DayLog

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_DIALECTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _utcnow():
    return datetime.now(timezone.utc)


def _is_duplicate_day(error: IntegrityError) -> bool:
    # PostgreSQL names the constraint; SQLite names the columns
    message = str(error.orig)
    return "uq_daily_log_user_day" in message or "daily_logs.user_id, daily_logs.day" in message


class LogStore:
    @staticmethod
    def upsert(db: Session, user_id: int, day, outcome: bool, note: str | None = None) -> tuple[DayLog, str]:
        """
        Create or overwrite the log for (user, day). Returns (log, action) with
        action "created" or "updated". A note of None keeps the stored note.
        """
        d = datekey.parse(day)
        if note is not None and len(note) > NOTE_MAX_LENGTH:
            raise NoteTooLong(f"Note must be at most {NOTE_MAX_LENGTH} characters")

        insert = UPSERT_DIALECTS.get(db.get_bind().dialect.name)
        try:
            if insert is None:
                log, action = LogStore._upsert_two_step(db, user_id, d, outcome, note)
            else:
                log, action = LogStore._upsert_atomic(db, insert, user_id, d, outcome, note)
        except SQLAlchemyError:
            db.rollback()
            raise

        logger.info("Log %s user_id=%s day=%s outcome=%s", action, user_id, d.isoformat(), outcome)
        return log, action

    @staticmethod
    def _upsert_atomic(db: Session, insert, user_id: int, d: date, outcome: bool, note: str | None):
        now = _utcnow()
        stmt = insert(DayLog).values(
            user_id=user_id,
            day=d,
            outcome=outcome,
            note=note,
            version=1,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "day"],
            set_={
                "outcome": stmt.excluded.outcome,
                "note": func.coalesce(stmt.excluded.note, DayLog.note),
                "updated_at": stmt.excluded.updated_at,
                "deleted_at": None,
                "version": DayLog.version + 1,
            },
        ).returning(DayLog.id, DayLog.version)

        log_id, version = db.execute(stmt).one()
        db.commit()

        log = db.get(DayLog, log_id, populate_existing=True)
        return log, "created" if version == 1 else "updated"

    @staticmethod
    def _upsert_two_step(db: Session, user_id: int, d: date, outcome: bool, note: str | None):
        # The unique constraint still guards the insert; a lost race surfaces
        # as an IntegrityError naming it. Other integrity errors propagate.
        log = db.query(DayLog).filter_by(user_id=user_id, day=d).first()
        if log is None:
            now = _utcnow()
            log = DayLog(user_id=user_id, day=d, outcome=outcome, note=note,
                         version=1, created_at=now, updated_at=now)
            db.add(log)
            action = "created"
        else:
            log.outcome = outcome
            if note is not None:
                log.note = note
            log.updated_at = _utcnow()
            log.deleted_at = None
            log.version = log.version + 1
            action = "updated"
        try:
            db.commit()
        except IntegrityError as e:
            if not _is_duplicate_day(e):
                raise
            db.rollback()
            raise DuplicateConflict() from None
        db.refresh(log)
        return log, action

    @staticmethod
    def upsert_with_retry(db: Session, user_id: int, day, outcome: bool, note: str | None = None) -> tuple[DayLog, str]:
        """upsert(), retried once if a concurrent write collided."""
        try:
            return LogStore.upsert(db, user_id, day, outcome, note)
        except DuplicateConflict:
            logger.warning("Upsert conflict user_id=%s day=%s, retrying once", user_id, day)
            return LogStore.upsert(db, user_id, day, outcome, note)

    @staticmethod
    def _owned(db: Session, user_id: int, log_id: int) -> DayLog:
        log = db.query(DayLog).filter_by(id=log_id, user_id=user_id).first()
        if log is None:
            raise NotFound()
        return log

    @staticmethod
    def soft_delete(db: Session, user_id: int, log_id: int) -> DayLog:
        log = LogStore._owned(db, user_id, log_id)
        try:
            log.deleted_at = _utcnow()
            db.commit()
            db.refresh(log)
        except SQLAlchemyError:
            db.rollback()
            raise
        logger.info("Log deleted user_id=%s log_id=%s", user_id, log_id)
        return log

    @staticmethod
    def restore(db: Session, user_id: int, log_id: int) -> DayLog:
        log = LogStore._owned(db, user_id, log_id)
        try:
            log.deleted_at = None
            db.commit()
            db.refresh(log)
        except SQLAlchemyError:
            db.rollback()
            raise
        logger.info("Log restored user_id=%s log_id=%s", user_id, log_id)
        return log

    @staticmethod
    def list_active(db: Session, user_id: int) -> list[DayLog]:
        """All live logs of a user, newest day first."""
        logs = db.query(DayLog)\
                 .filter(DayLog.user_id == user_id, DayLog.deleted_at.is_(None))\
                 .order_by(DayLog.day.desc()).all()
        logger.debug("Fetched logs user_id=%s count=%d", user_id, len(logs))
        return logs

    @staticmethod
    def get_active_for_day(db: Session, user_id: int, day) -> DayLog | None:
        d = datekey.parse(day)
        return db.query(DayLog).filter(
            DayLog.user_id == user_id,
            DayLog.day == d,
            DayLog.deleted_at.is_(None),
        ).first()

    @staticmethod
    def export(db: Session, user_id: int) -> dict:
        logs = LogStore.list_active(db, user_id)
        logger.info("Logs exported user_id=%s count=%d", user_id, len(logs))
        return {
            "exported_at": _utcnow().isoformat(),
            "total_logs": len(logs),
            "logs": [
                {
                    "day": l.day.isoformat(),
                    "outcome": l.outcome,
                    "note": l.note,
                    "created_at": l.created_at.isoformat() if l.created_at else None,
                }
                for l in logs
            ],
        }
