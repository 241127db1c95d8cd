import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from success_tracker.config import (
    CORS_ORIGINS, RATE_LIMIT_WINDOW_SECONDS, RATE_LIMIT_READS, RATE_LIMIT_MUTATIONS,
)
from success_tracker.database import init_db
from success_tracker.errors import TrackerError
from success_tracker.logging_config import setup_logging, log_request
from success_tracker.routes.health_routes import router as health_router
from success_tracker.routes.insight_routes import router as insight_router
from success_tracker.routes.log_routes import router as log_router
from success_tracker.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_db()
    except Exception as e:
        # The DB user may lack CREATE privileges when tables are managed elsewhere
        logger.error(f"Database init skipped or failed: {e}")
    yield


def create_app(read_limiter: RateLimiter | None = None, mutation_limiter: RateLimiter | None = None) -> FastAPI:
    setup_logging()
    app = FastAPI(title="Success Tracker", lifespan=lifespan)

    if read_limiter is None:
        read_limiter = RateLimiter(RATE_LIMIT_WINDOW_SECONDS, RATE_LIMIT_READS)
    if mutation_limiter is None:
        mutation_limiter = RateLimiter(RATE_LIMIT_WINDOW_SECONDS, RATE_LIMIT_MUTATIONS)
    app.state.read_limiter = read_limiter
    app.state.mutation_limiter = mutation_limiter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        log_request(logger, request.method, request.url.path, response.status_code,
                    (time.perf_counter() - start) * 1000)
        # Expired windows are swept on the request path; no background timer
        for limiter in (app.state.read_limiter, app.state.mutation_limiter):
            limiter.sweep()
        return response

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(request: Request, exc: TrackerError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    app.include_router(health_router)
    app.include_router(log_router)
    app.include_router(insight_router)

    @app.get("/")
    async def root():
        return {"status": "Success Tracker backend is running."}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("success_tracker.main:app", host="0.0.0.0", port=8000, reload=True)
