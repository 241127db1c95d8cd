from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from success_tracker.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    external_id = Column(String(255), unique=True, nullable=False)  # identity provider subject
    email = Column(String(255), nullable=False, default="pending@email.com")
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    logs = relationship("DayLog", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
