"""
logging_config.py — one-time logging setup for the API process.
"""

import logging

from success_tracker.config import LOG_LEVEL

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = LOG_LEVEL):
    """Configure the root logger. Safe to call more than once."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def log_request(logger: logging.Logger, method: str, path: str, status_code: int, duration_ms: float):
    """Log a finished request at a level chosen by its status class."""
    msg = "%s %s -> %d (%.1fms)"
    if status_code >= 500:
        logger.error(msg, method, path, status_code, duration_ms)
    elif status_code >= 400:
        logger.warning(msg, method, path, status_code, duration_ms)
    else:
        logger.info(msg, method, path, status_code, duration_ms)
