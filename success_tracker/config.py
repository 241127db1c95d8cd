import os
from dotenv import load_dotenv

load_dotenv()

# --- Identity provider tokens ---
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-key")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE") or None

# --- Database ---
# Default to local SQLite, but prefer environment variable (Postgres in production)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/success_tracker.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Day logs ---
MAX_LOG_AGE_DAYS = int(os.getenv("MAX_LOG_AGE_DAYS", "365"))
NOTE_MAX_LENGTH = 500  # matches the daily_logs.note column size

# --- Rate limiting (per user, per process) ---
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
RATE_LIMIT_READS = int(os.getenv("RATE_LIMIT_READS", "100"))
RATE_LIMIT_MUTATIONS = int(os.getenv("RATE_LIMIT_MUTATIONS", "30"))

# --- HTTP ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
