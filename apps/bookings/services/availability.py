"""Read-only booking views for calendars and the house status widget."""

from datetime import date
from typing import Optional
from uuid import UUID

from django.utils import timezone

from apps.accounts.models import User
from apps.bookings.conflicts import (
    BlockedCalendar,
    HouseStatus,
    blocked_calendar,
    house_status,
    parse_range,
)
from apps.bookings.models import Booking, BookingStatus
from apps.bookings.pricing import Quote, quote_booking

from .booking_management import get_member_property
from .exceptions import InvalidBookingRangeError


def get_blocked_calendar(
    *,
    property_id: UUID,
    user: User,
    today: Optional[date] = None
) -> BlockedCalendar:
    """Dates a booking calendar must disable (property members only)."""
    property_obj = get_member_property(property_id=property_id, user=user)
    bookings = (
        Booking.objects
        .filter(property=property_obj)
        .exclude(status=BookingStatus.REJECTED)
    )
    return blocked_calendar(bookings, today=today or timezone.localdate())


def get_house_status(
    *,
    property_id: UUID,
    user: User,
    today: Optional[date] = None
) -> HouseStatus:
    """Current occupant and next confirmed stays (property members only)."""
    property_obj = get_member_property(property_id=property_id, user=user)
    bookings = (
        Booking.objects
        .filter(property=property_obj, status=BookingStatus.CONFIRMED)
        .select_related('user')
    )
    return house_status(bookings, today or timezone.localdate())


def get_booking_quote(
    *,
    property_id: UUID,
    user: User,
    start_date: Optional[date],
    end_date: Optional[date],
    adults: int = 1,
    children: int = 0,
    selected_optional_fees=None
) -> Quote:
    """
    Price a prospective stay with the property's current settings.

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If user is not a member
        InvalidBookingRangeError: If dates are malformed
    """
    property_obj = get_member_property(property_id=property_id, user=user)

    parsed = parse_range(start_date, end_date)
    if not parsed.accepted:
        raise InvalidBookingRangeError(parsed.message)

    return quote_booking(
        property_obj.get_settings(),
        start_date,
        end_date,
        adults,
        children,
        selected_optional_fees,
    )
