import logging

from fastapi import Depends, Request, HTTPException, status
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from success_tracker.config import JWT_SECRET, JWT_ALGORITHM, JWT_AUDIENCE
from success_tracker.database import get_db
from success_tracker.services.user_service import UserService

logger = logging.getLogger(__name__)


def verify_token(token: str) -> dict | None:
    """Decode and verify an identity-provider JWT. Returns the payload or None on failure."""
    try:
        return jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            options={"verify_aud": JWT_AUDIENCE is not None},
        )
    except JWTError:
        return None


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_payload(request: Request) -> dict:
    """
    FastAPI dependency — extracts the Bearer token from the Authorization
    header and verifies it. Raises HTTP 401 if the token is missing or invalid.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        logger.warning("Unauthorized access attempt: missing bearer token")
        raise _unauthorized("Missing or invalid Authorization header")

    payload = verify_token(auth_header.split(" ", 1)[1])
    if payload is None:
        logger.warning("Unauthorized access attempt: invalid token")
        raise _unauthorized("Invalid or expired token")

    if not payload.get("sub"):
        raise _unauthorized("Token payload missing required claims")
    return payload


def get_current_user(payload: dict = Depends(get_token_payload), db: Session = Depends(get_db)) -> int:
    """FastAPI dependency — local user id for the token subject, created on first use."""
    user = UserService.get_or_create(db, str(payload["sub"]), payload.get("email"))
    return user.id
