"""
dependencies.py — Per-user rate limits as FastAPI dependencies.
The limiters themselves live on app.state (see main.create_app).
"""

import logging

from fastapi import Depends, HTTPException, Request, status

from success_tracker.auth import get_current_user
from success_tracker.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


def _enforce(request: Request, limiter_name: str, key: str):
    limiter: RateLimiter = getattr(request.app.state, limiter_name)
    result = limiter.hit(key)
    if not result.allowed:
        logger.warning("Rate limit exceeded key=%s", key)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests",
            headers={"Retry-After": str(result.retry_after(limiter.clock()))},
        )


def reader(request: Request, user_id: int = Depends(get_current_user)) -> int:
    """Authenticated user id, counted against the read limit."""
    _enforce(request, "read_limiter", f"user:{user_id}")
    return user_id


def writer(request: Request, user_id: int = Depends(get_current_user)) -> int:
    """Authenticated user id, counted against the stricter mutation limit."""
    _enforce(request, "mutation_limiter", f"mutation:{user_id}")
    return user_id
