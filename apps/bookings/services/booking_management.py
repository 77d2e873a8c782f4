"""
Booking management service.

Handles the reservation lifecycle for a property: request, edit,
approve or reject, delete. Writers lock the property row, so the
overlap check and the insert happen as one step per property.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.bookings.conflicts import CheckStatus, check_candidate_range
from apps.bookings.models import Booking, BookingStatus
from apps.bookings.pricing import quote_booking
from apps.notifications.models import NotificationType
from apps.notifications.services import notify_on_commit
from apps.properties.models import Property

from .exceptions import (
    BookingNotFoundError,
    PropertyNotFoundError,
    InsufficientPermissionsError,
    InvalidBookingRangeError,
    InvalidGuestCountError,
    BookingConflictError,
    InvalidStatusTransitionError,
    InvalidTotalCostError,
)

logger = logging.getLogger(__name__)


def _lock_property(property_id: UUID) -> Property:
    try:
        return (
            Property.objects
            .select_for_update()
            .get(id=property_id)
        )
    except Property.DoesNotExist:
        raise PropertyNotFoundError(f"Property with ID {property_id} not found")


def _lock_booking(booking_id: UUID) -> Booking:
    try:
        return (
            Booking.objects
            .select_for_update()
            .select_related('property')
            .get(id=booking_id)
        )
    except Booking.DoesNotExist:
        raise BookingNotFoundError(f"Booking with ID {booking_id} not found")


def _validate_guests(adults: int, children: int) -> None:
    if adults is None or adults < 1:
        raise InvalidGuestCountError("At least one adult is required")
    if children is None or children < 0:
        raise InvalidGuestCountError("Children cannot be negative")


def _check_range(
    property_obj: Property,
    start_date: Optional[date],
    end_date: Optional[date],
    exclude_id: Optional[UUID] = None
) -> None:
    """Raise unless ``[start_date, end_date)`` is free and long enough."""
    existing = (
        Booking.objects
        .filter(property=property_obj)
        .exclude(status=BookingStatus.REJECTED)
    )
    result = check_candidate_range(
        existing,
        start_date,
        end_date,
        today=timezone.localdate(),
        exclude_id=exclude_id,
    )

    if result.status is CheckStatus.INVALID:
        raise InvalidBookingRangeError(result.message)
    if result.status is CheckStatus.CONFLICT:
        raise BookingConflictError(result.message)

    min_days = property_obj.get_settings()['limits']['min_days_to_book']
    if result.range.nights < min_days:
        raise InvalidBookingRangeError(f"Bookings must be at least {min_days} night(s) long")


def _resolve_total(
    property_obj: Property,
    start_date: date,
    end_date: date,
    adults: int,
    children: int,
    fees: List[str],
    total_cost: Optional[Decimal]
) -> Decimal:
    if total_cost is not None:
        if Decimal(total_cost) < 0:
            raise InvalidTotalCostError("Total cost cannot be negative")
        return Decimal(total_cost)
    quote = quote_booking(property_obj.get_settings(), start_date, end_date, adults, children, fees)
    return quote.total


def _dedupe(fee_ids: Optional[Iterable[str]]) -> List[str]:
    return list(dict.fromkeys(str(fee_id) for fee_id in (fee_ids or [])))


@transaction.atomic
def create_booking(
    *,
    property_id: UUID,
    user: User,
    start_date: Optional[date],
    end_date: Optional[date],
    adults: int = 1,
    children: int = 0,
    selected_optional_fees: Optional[List[str]] = None,
    total_cost: Optional[Decimal] = None
) -> Booking:
    """
    Request a stay (property members only).

    The booking starts pending. Property admins other than the requester
    are notified once the transaction commits.

    Args:
        property_id: UUID of the property
        user: User requesting the stay
        start_date: First night
        end_date: Checkout day (exclusive)
        adults: Adult guests, at least 1
        children: Child guests
        selected_optional_fees: Optional fixed-cost ids the guest opted into
        total_cost: Agreed total; quoted from property settings if omitted

    Returns:
        Created Booking instance

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If user is not a member
        InvalidBookingRangeError: If dates are malformed, past or too short
        InvalidGuestCountError: If guest counts are invalid
        BookingConflictError: If dates overlap a pending or confirmed booking
    """
    property_obj = _lock_property(property_id)

    if not property_obj.has_member(user):
        raise InsufficientPermissionsError("Only property members can book")

    _validate_guests(adults, children)
    _check_range(property_obj, start_date, end_date)

    fees = _dedupe(selected_optional_fees)
    booking = Booking.objects.create(
        property=property_obj,
        user=user,
        user_name=user.get_display_name(),
        start_date=start_date,
        end_date=end_date,
        adults=adults,
        children=children,
        selected_optional_fees=fees,
        total_cost=_resolve_total(property_obj, start_date, end_date, adults, children, fees, total_cost),
        status=BookingStatus.PENDING,
    )

    logger.info(
        "Booking %s requested by %s for property %s: %s to %s",
        booking.id, user.email, property_obj.id, start_date, end_date
    )

    notify_on_commit(
        user_ids=property_obj.admins.values_list('id', flat=True),
        type=NotificationType.BOOKING_REQUEST,
        data={
            'booking_id': str(booking.id),
            'property_id': str(property_obj.id),
            'property_name': property_obj.name,
            'user_name': booking.user_name,
        },
        exclude=[user.id],
    )

    return booking


@transaction.atomic
def update_booking(
    *,
    booking_id: UUID,
    user: User,
    start_date: Optional[date],
    end_date: Optional[date],
    adults: int = 1,
    children: int = 0,
    selected_optional_fees: Optional[List[str]] = None,
    total_cost: Optional[Decimal] = None
) -> Booking:
    """
    Edit a booking (booker or property admin).

    The overlap check runs again without the booking itself, and the
    booking always returns to pending.

    Raises:
        BookingNotFoundError: If booking doesn't exist
        InsufficientPermissionsError: If user is neither booker nor admin
        InvalidBookingRangeError: If dates are malformed, past or too short
        InvalidGuestCountError: If guest counts are invalid
        BookingConflictError: If dates overlap another booking
    """
    booking = _lock_booking(booking_id)
    property_obj = _lock_property(booking.property_id)

    if booking.user_id != user.id and not property_obj.is_admin(user):
        raise InsufficientPermissionsError("Only the booker or a property admin can edit this booking")

    _validate_guests(adults, children)
    _check_range(property_obj, start_date, end_date, exclude_id=booking.id)

    fees = _dedupe(selected_optional_fees)
    booking.start_date = start_date
    booking.end_date = end_date
    booking.adults = adults
    booking.children = children
    booking.selected_optional_fees = fees
    booking.total_cost = _resolve_total(property_obj, start_date, end_date, adults, children, fees, total_cost)
    booking.status = BookingStatus.PENDING
    booking.save()

    logger.info("Booking %s edited by %s, back to pending", booking.id, user.email)
    return booking


@transaction.atomic
def update_booking_status(
    *,
    booking_id: UUID,
    new_status: str,
    user: User
) -> Booking:
    """
    Confirm or reject a booking (admin only).

    Confirming re-runs the overlap check, since a rejected booking's
    dates may have been taken in the meantime. Setting the current
    status again is a no-op. The booker is notified of real changes.

    Raises:
        BookingNotFoundError: If booking doesn't exist
        InsufficientPermissionsError: If user is not admin
        InvalidStatusTransitionError: If new_status is not confirmed/rejected
        BookingConflictError: If confirming would overlap another booking
    """
    if new_status not in (BookingStatus.CONFIRMED, BookingStatus.REJECTED):
        raise InvalidStatusTransitionError(f"Cannot move a booking to '{new_status}'")

    booking = _lock_booking(booking_id)
    property_obj = _lock_property(booking.property_id)

    if not property_obj.is_admin(user):
        raise InsufficientPermissionsError("Only property admins can approve or reject bookings")

    if booking.status == new_status:
        return booking

    if new_status == BookingStatus.CONFIRMED:
        existing = (
            Booking.objects
            .filter(property=property_obj)
            .exclude(status=BookingStatus.REJECTED)
        )
        result = check_candidate_range(existing, booking.start_date, booking.end_date, exclude_id=booking.id)
        if result.status is CheckStatus.CONFLICT:
            raise BookingConflictError(result.message)

    previous = booking.status
    booking.status = new_status
    booking.save(update_fields=['status', 'updated_at'])

    logger.info(
        "Booking %s moved from %s to %s by %s",
        booking.id, previous, new_status, user.email
    )

    notification_type = (
        NotificationType.BOOKING_APPROVED
        if new_status == BookingStatus.CONFIRMED
        else NotificationType.BOOKING_REJECTED
    )
    notify_on_commit(
        user_ids=[booking.user_id],
        type=notification_type,
        data={
            'booking_id': str(booking.id),
            'property_id': str(property_obj.id),
            'property_name': property_obj.name,
        },
    )

    return booking


@transaction.atomic
def delete_booking(*, booking_id: UUID, user: User) -> None:
    """
    Delete a booking (booker or property admin).

    Raises:
        BookingNotFoundError: If booking doesn't exist
        InsufficientPermissionsError: If user is neither booker nor admin
    """
    booking = _lock_booking(booking_id)

    if booking.user_id != user.id and not booking.property.is_admin(user):
        raise InsufficientPermissionsError("Only the booker or a property admin can delete this booking")

    logger.info("Booking %s deleted by %s", booking.id, user.email)
    booking.delete()


def get_booking(*, booking_id: UUID, user: User) -> Booking:
    """
    Get one booking (property members only).

    Raises:
        BookingNotFoundError: If booking doesn't exist
        InsufficientPermissionsError: If user is not a member
    """
    try:
        booking = Booking.objects.select_related('property', 'user').get(id=booking_id)
    except Booking.DoesNotExist:
        raise BookingNotFoundError(f"Booking with ID {booking_id} not found")

    if not booking.property.has_member(user):
        raise InsufficientPermissionsError("You are not a member of this property")

    return booking


def get_member_property(*, property_id: UUID, user: User) -> Property:
    """
    Get a property the user belongs to.

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If user is not a member
    """
    try:
        property_obj = Property.objects.get(id=property_id)
    except Property.DoesNotExist:
        raise PropertyNotFoundError(f"Property with ID {property_id} not found")

    if not property_obj.has_member(user):
        raise InsufficientPermissionsError("You are not a member of this property")

    return property_obj


def get_bookings(
    *,
    property_id: UUID,
    user: User,
    status: Optional[str] = None
) -> QuerySet[Booking]:
    """Bookings of a property, by start date (property members only)."""
    property_obj = get_member_property(property_id=property_id, user=user)

    queryset = Booking.objects.filter(property=property_obj).select_related('user')
    if status:
        queryset = queryset.filter(status=status)
    return queryset.order_by('start_date', 'created_at')


def get_user_bookings(*, user: User) -> QuerySet[Booking]:
    """Every booking the user made, across properties."""
    return (
        Booking.objects
        .filter(user=user)
        .select_related('property')
        .order_by('-start_date')
    )
