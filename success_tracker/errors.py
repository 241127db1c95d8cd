"""
errors.py — Error kinds raised by the date policy, the log store and the engines.

Every error carries the HTTP status the API layer maps it to. Only
DuplicateConflict is eligible for an automatic (single) retry.
"""


class TrackerError(Exception):
    status_code = 400
    retryable = False
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFormat(TrackerError, ValueError):
    default_message = "Invalid date format. Use YYYY-MM-DD"


class FutureDate(TrackerError):
    default_message = "Cannot log future dates"


class TooOld(TrackerError):
    default_message = "Cannot log dates more than 1 year in the past"


class NoteTooLong(TrackerError):
    default_message = "Note must be at most 500 characters"


class NotFound(TrackerError):
    status_code = 404
    default_message = "Log not found"


class DuplicateConflict(TrackerError):
    """Concurrent writes for the same (user, day) collided at the storage layer."""

    status_code = 409
    retryable = True
    default_message = "Log was modified concurrently, please retry"


class DuplicateDay(TrackerError, ValueError):
    """A log collection holds two entries for one day (corrupted upstream)."""

    status_code = 500
    default_message = "Log collection contains duplicate days"
