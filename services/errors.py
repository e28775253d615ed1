from contextlib import contextmanager

from sqlalchemy.exc import DBAPIError

from models import db


class BookingError(Exception):
    """Base class for errors surfaced to the caller as a user-facing message."""

    status_code = 400
    default_message = "Booking request failed"

    def __init__(self, message=None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self):
        out = {"error": self.message}
        out.update(self.details)
        return out


class ValidationError(BookingError):
    status_code = 400
    default_message = "Invalid booking request"


class NotFound(BookingError):
    status_code = 404
    default_message = "Not found, please reselect and retry"


class Conflict(BookingError):
    status_code = 409
    default_message = "Slot no longer available"


class BackendUnavailable(BookingError):
    status_code = 503
    default_message = "Booking service is temporarily unavailable"


@contextmanager
def store_errors(operation: str):
    """Roll back and re-raise driver-level failures as BackendUnavailable."""
    try:
        yield
    except DBAPIError as exc:
        db.session.rollback()
        raise BackendUnavailable(f"Could not {operation}, please try again later") from exc
