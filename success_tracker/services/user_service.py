"""
user_service.py — Local user rows for identity-provider subjects.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from success_tracker.models.user import User
from success_tracker.services.log_store import UPSERT_DIALECTS

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def get_or_create(db: Session, external_id: str, email: str | None = None) -> User:
        """
        Return the user for a token subject, inserting it on first sight.
        Concurrent first requests for one subject both end up with the same row.
        """
        values = {"external_id": external_id, "email": email or "pending@email.com"}
        insert = UPSERT_DIALECTS.get(db.get_bind().dialect.name)
        try:
            if insert is not None:
                db.execute(insert(User).values(**values).on_conflict_do_nothing(index_elements=["external_id"]))
                db.commit()
            elif db.query(User).filter_by(external_id=external_id).first() is None:
                db.add(User(**values))
                db.commit()
        except IntegrityError:
            db.rollback()

        user = db.query(User).filter_by(external_id=external_id).first()
        if user is None:
            raise RuntimeError("Failed to create user")
        return user
