# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from success_tracker.models.user import User
from success_tracker.models.day_log import DayLog

__all__ = [
    "User",
    "DayLog",
]
