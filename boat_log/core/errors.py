"""Exceptions raised by validation and the repositories.

The web layer maps each class to a status code; the message is shown to the
client as-is, so it must never carry store internals.
"""


class BoatLogError(Exception):
    """Base class for every error the application reports to clients."""

    status_code = 500


class ValidationError(BoatLogError):
    """Malformed input: bad identifier, missing field, bad value, inverted range."""

    status_code = 400


class NotFoundError(BoatLogError):
    status_code = 404


class ConflictError(BoatLogError):
    status_code = 409


class BookingConflictError(ConflictError):
    def __init__(self, message: str = "Boat is not available for the selected dates"):
        super().__init__(message)
