from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Date, DateTime, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from success_tracker.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class DayLog(Base):
    __tablename__ = "daily_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    day = Column(Date, nullable=False)
    outcome = Column(Boolean, nullable=False)  # True = win
    note = Column(String(500), nullable=True)
    version = Column(Integer, nullable=False, default=1)  # bumped on every re-log
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=False, default=_utcnow)
    deleted_at = Column(DateTime, nullable=True)  # set = soft-deleted

    user = relationship("User", back_populates="logs")

    # Covers tombstoned rows too: a re-log revives the old row instead of adding one
    __table_args__ = (
        UniqueConstraint("user_id", "day", name="uq_daily_log_user_day"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "day": self.day.isoformat(),
            "outcome": self.outcome,
            "note": self.note,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
        }
