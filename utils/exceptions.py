"""
Domain exceptions for the booking portal.

Services raise these; ``main.py`` registers a handler that turns them into
JSON error responses using ``status_code`` and the message as ``detail``.
"""


class BookingPortalError(Exception):
    """Base exception for portal errors"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# --- Validation (rejected before any remote call) ---

class ValidationError(BookingPortalError):
    status_code = 400


class InsufficientBalanceError(ValidationError):
    pass


# --- Not found ---

class NotFoundError(BookingPortalError):
    status_code = 404


class BookingNotFoundError(NotFoundError):
    def __init__(self, message: str = "Booking ID not found. Please try again."):
        super().__init__(message)


class HotelNotFoundError(NotFoundError):
    pass


class AgencyNotFoundError(NotFoundError):
    pass


class BulkOrderNotFoundError(NotFoundError):
    pass


# --- Conflicts ---

class ConflictError(BookingPortalError):
    status_code = 409


class DuplicateError(ConflictError):
    pass


class InvalidStatusTransitionError(ConflictError):
    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change a booking from '{current}' to '{requested}'.")
        self.current = current
        self.requested = requested


class QuoteMismatchError(ConflictError):
    pass


# --- Remote booking API ---

class RemoteApiError(BookingPortalError):
    status_code = 502


class BookingSyncError(RemoteApiError):
    """A booking change was rejected remotely and rolled back locally."""


class BookingConfirmationError(RemoteApiError):
    """The booking was created but the follow-up confirm call failed."""

    def __init__(self, booking_id: str, message: str):
        super().__init__(message)
        self.booking_id = booking_id
