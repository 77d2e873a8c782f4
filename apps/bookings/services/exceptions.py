"""
Domain-specific exceptions for bookings app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class BookingsServiceError(Exception):
    """Base exception for all bookings service errors."""
    pass


class BookingNotFoundError(BookingsServiceError):
    """Raised when a booking does not exist."""
    pass


class PropertyNotFoundError(BookingsServiceError):
    """Raised when the booked property does not exist."""
    pass


class InsufficientPermissionsError(BookingsServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass


class InvalidBookingRangeError(BookingsServiceError):
    """Raised when dates are missing, reversed, in the past or too short."""
    pass


class InvalidGuestCountError(BookingsServiceError):
    """Raised when adults < 1 or children < 0."""
    pass


class BookingConflictError(BookingsServiceError):
    """Raised when the requested dates overlap a pending or confirmed booking."""
    pass


class InvalidStatusTransitionError(BookingsServiceError):
    """Raised when an admin requests a status other than confirmed or rejected."""
    pass


class InvalidTotalCostError(BookingsServiceError):
    """Raised when an explicit total cost is negative."""
    pass
