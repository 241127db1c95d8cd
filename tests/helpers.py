from datetime import datetime, timedelta, timezone

from jose import jwt

from success_tracker.config import JWT_SECRET, JWT_ALGORITHM


def make_token(sub: str, expires_in: timedelta = timedelta(hours=1), **claims) -> str:
    """Token shaped like the identity provider's session JWT."""
    payload = {"sub": sub, "exp": datetime.now(timezone.utc) + expires_in, **claims}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def bearer(sub: str) -> dict:
    return {"Authorization": f"Bearer {make_token(sub)}"}
