"""
Bookings app services layer.

Reservation lifecycle plus read-only calendar helpers. Conflict and
pricing rules live in ``apps.bookings.conflicts`` and
``apps.bookings.pricing``; these services load data and apply them.
"""

from .exceptions import (
    BookingsServiceError,
    BookingNotFoundError,
    PropertyNotFoundError,
    InsufficientPermissionsError,
    InvalidBookingRangeError,
    InvalidGuestCountError,
    BookingConflictError,
    InvalidStatusTransitionError,
    InvalidTotalCostError,
)

from .booking_management import (
    create_booking,
    update_booking,
    update_booking_status,
    delete_booking,
    get_booking,
    get_bookings,
    get_user_bookings,
    get_member_property,
)

from .availability import (
    get_blocked_calendar,
    get_house_status,
    get_booking_quote,
)


__all__ = [
    # Exceptions
    'BookingsServiceError',
    'BookingNotFoundError',
    'PropertyNotFoundError',
    'InsufficientPermissionsError',
    'InvalidBookingRangeError',
    'InvalidGuestCountError',
    'BookingConflictError',
    'InvalidStatusTransitionError',
    'InvalidTotalCostError',

    # Lifecycle
    'create_booking',
    'update_booking',
    'update_booking_status',
    'delete_booking',
    'get_booking',
    'get_bookings',
    'get_user_bookings',
    'get_member_property',

    # Availability
    'get_blocked_calendar',
    'get_house_status',
    'get_booking_quote',
]
