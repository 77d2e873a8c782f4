"""
Service layer tests for bookings app.

Tests cover:
- Server-side overlap check on create, edit and confirm
- Status lifecycle and notifications
- Quoting when no total is given
- Permission checks
"""

import pytest
from decimal import Decimal
from uuid import uuid4

from apps.bookings.models import Booking, BookingStatus
from apps.bookings.services import (
    create_booking,
    update_booking,
    update_booking_status,
    delete_booking,
    get_booking,
    get_bookings,
    get_blocked_calendar,
    get_house_status,
    get_booking_quote,
)
from apps.bookings.services.exceptions import (
    BookingNotFoundError,
    PropertyNotFoundError,
    InsufficientPermissionsError,
    InvalidBookingRangeError,
    InvalidGuestCountError,
    InvalidTotalCostError,
    BookingConflictError,
    InvalidStatusTransitionError,
)
from apps.notifications.models import Notification, NotificationType
from apps.properties.models import Property

from .conftest import days_from_today


# =============================================================================
# Create
# =============================================================================

@pytest.mark.django_db
class TestCreateBooking:
    """Tests for create_booking."""

    def test_create_pending_booking_with_quote(self, house, member_user):
        booking = create_booking(
            property_id=house.id,
            user=member_user,
            start_date=days_from_today(10),
            end_date=days_from_today(12),
            adults=2,
            children=1,
            selected_optional_fees=['fc-linen', 'fc-linen'],
        )

        assert booking.status == BookingStatus.PENDING
        assert booking.user_name == 'Roster Member'
        assert booking.selected_optional_fees == ['fc-linen']
        # 2 nights * (2*3600 + 1000) + cleaning 20000 + linen 5000
        assert booking.total_cost == Decimal('41400.00')

    def test_explicit_total_cost_kept(self, house, member_user):
        booking = create_booking(
            property_id=house.id,
            user=member_user,
            start_date=days_from_today(10),
            end_date=days_from_today(12),
            total_cost=Decimal('0'),
        )

        assert booking.total_cost == Decimal('0')

    def test_negative_total_cost_rejected(self, house, member_user):
        with pytest.raises(InvalidTotalCostError):
            create_booking(
                property_id=house.id,
                user=member_user,
                start_date=days_from_today(10),
                end_date=days_from_today(12),
                total_cost=Decimal('-1'),
            )

    def test_overlap_with_pending_rejected(self, house, member_user, make_booking):
        make_booking(10, 15)

        with pytest.raises(BookingConflictError):
            create_booking(
                property_id=house.id,
                user=member_user,
                start_date=days_from_today(14),
                end_date=days_from_today(16),
            )

    def test_back_to_back_allowed(self, house, member_user, make_booking):
        make_booking(10, 15, status=BookingStatus.CONFIRMED)

        booking = create_booking(
            property_id=house.id,
            user=member_user,
            start_date=days_from_today(15),
            end_date=days_from_today(17),
        )

        assert booking.pk is not None

    def test_rejected_dates_are_free_again(self, house, member_user, make_booking):
        make_booking(10, 15, status=BookingStatus.REJECTED)

        booking = create_booking(
            property_id=house.id,
            user=member_user,
            start_date=days_from_today(10),
            end_date=days_from_today(15),
        )

        assert booking.status == BookingStatus.PENDING

    def test_past_dates_rejected(self, house, member_user):
        with pytest.raises(InvalidBookingRangeError):
            create_booking(
                property_id=house.id,
                user=member_user,
                start_date=days_from_today(-2),
                end_date=days_from_today(1),
            )

    def test_reversed_dates_rejected(self, house, member_user):
        with pytest.raises(InvalidBookingRangeError):
            create_booking(
                property_id=house.id,
                user=member_user,
                start_date=days_from_today(5),
                end_date=days_from_today(3),
            )

    def test_missing_dates_rejected(self, house, member_user):
        with pytest.raises(InvalidBookingRangeError):
            create_booking(property_id=house.id, user=member_user, start_date=None, end_date=None)

    def test_min_days_to_book_enforced(self, house, member_user):
        settings_doc = house.get_settings()
        settings_doc['limits']['min_days_to_book'] = 3
        Property.objects.filter(id=house.id).update(settings=settings_doc)

        with pytest.raises(InvalidBookingRangeError):
            create_booking(
                property_id=house.id,
                user=member_user,
                start_date=days_from_today(10),
                end_date=days_from_today(12),
            )

    def test_zero_adults_rejected(self, house, member_user):
        with pytest.raises(InvalidGuestCountError):
            create_booking(
                property_id=house.id,
                user=member_user,
                start_date=days_from_today(10),
                end_date=days_from_today(12),
                adults=0,
            )

    def test_outsider_cannot_book(self, house, other_user):
        with pytest.raises(InsufficientPermissionsError):
            create_booking(
                property_id=house.id,
                user=other_user,
                start_date=days_from_today(10),
                end_date=days_from_today(12),
            )

    def test_unknown_property(self, member_user):
        with pytest.raises(PropertyNotFoundError):
            create_booking(
                property_id=uuid4(),
                user=member_user,
                start_date=days_from_today(10),
                end_date=days_from_today(12),
            )

    def test_admins_except_requester_notified(
        self, house, admin_user, property_owner, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True):
            booking = create_booking(
                property_id=house.id,
                user=admin_user,
                start_date=days_from_today(10),
                end_date=days_from_today(12),
            )

        notifications = Notification.objects.filter(type=NotificationType.BOOKING_REQUEST)
        assert [n.user_id for n in notifications] == [property_owner.id]
        assert notifications[0].data['booking_id'] == str(booking.id)


# =============================================================================
# Edit / status / delete
# =============================================================================

@pytest.mark.django_db
class TestUpdateBooking:
    """Tests for update_booking."""

    def test_edit_resets_status_to_pending(self, make_booking, member_user):
        booking = make_booking(10, 12, status=BookingStatus.CONFIRMED)

        updated = update_booking(
            booking_id=booking.id,
            user=member_user,
            start_date=days_from_today(11),
            end_date=days_from_today(14),
            adults=1,
        )

        assert updated.status == BookingStatus.PENDING
        assert updated.end_date == days_from_today(14)

    def test_edit_overlapping_itself_allowed(self, make_booking, member_user):
        booking = make_booking(10, 12)

        updated = update_booking(
            booking_id=booking.id,
            user=member_user,
            start_date=days_from_today(10),
            end_date=days_from_today(13),
        )

        assert updated.get_nights() == 3

    def test_edit_into_other_booking_rejected(self, make_booking, member_user, admin_user):
        make_booking(20, 25, user=admin_user)
        booking = make_booking(10, 12)

        with pytest.raises(BookingConflictError):
            update_booking(
                booking_id=booking.id,
                user=member_user,
                start_date=days_from_today(18),
                end_date=days_from_today(21),
            )

        booking.refresh_from_db()
        assert booking.start_date == days_from_today(10)

    def test_stranger_cannot_edit(self, make_booking, other_user):
        booking = make_booking(10, 12)

        with pytest.raises(InsufficientPermissionsError):
            update_booking(
                booking_id=booking.id,
                user=other_user,
                start_date=days_from_today(10),
                end_date=days_from_today(12),
            )

    def test_admin_can_edit(self, make_booking, admin_user):
        booking = make_booking(10, 12)

        updated = update_booking(
            booking_id=booking.id,
            user=admin_user,
            start_date=days_from_today(10),
            end_date=days_from_today(11),
        )

        assert updated.get_nights() == 1


@pytest.mark.django_db
class TestUpdateBookingStatus:
    """Tests for update_booking_status."""

    def test_confirm_notifies_booker(self, make_booking, admin_user, member_user, django_capture_on_commit_callbacks):
        booking = make_booking(10, 12)

        with django_capture_on_commit_callbacks(execute=True):
            updated = update_booking_status(
                booking_id=booking.id,
                new_status=BookingStatus.CONFIRMED,
                user=admin_user,
            )

        assert updated.status == BookingStatus.CONFIRMED
        notification = Notification.objects.get(user=member_user)
        assert notification.type == NotificationType.BOOKING_APPROVED

    def test_reject_notifies_booker(self, make_booking, admin_user, member_user, django_capture_on_commit_callbacks):
        booking = make_booking(10, 12)

        with django_capture_on_commit_callbacks(execute=True):
            update_booking_status(
                booking_id=booking.id,
                new_status=BookingStatus.REJECTED,
                user=admin_user,
            )

        notification = Notification.objects.get(user=member_user)
        assert notification.type == NotificationType.BOOKING_REJECTED

    def test_same_status_is_noop(self, make_booking, admin_user, django_capture_on_commit_callbacks):
        booking = make_booking(10, 12, status=BookingStatus.CONFIRMED)

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            update_booking_status(
                booking_id=booking.id,
                new_status=BookingStatus.CONFIRMED,
                user=admin_user,
            )

        assert callbacks == []

    def test_member_cannot_decide(self, make_booking, member_user):
        booking = make_booking(10, 12)

        with pytest.raises(InsufficientPermissionsError):
            update_booking_status(
                booking_id=booking.id,
                new_status=BookingStatus.CONFIRMED,
                user=member_user,
            )

    def test_pending_is_not_a_decision(self, make_booking, admin_user):
        booking = make_booking(10, 12)

        with pytest.raises(InvalidStatusTransitionError):
            update_booking_status(
                booking_id=booking.id,
                new_status=BookingStatus.PENDING,
                user=admin_user,
            )

    def test_confirming_rejected_booking_checks_overlap(self, make_booking, admin_user):
        rejected = make_booking(10, 15, status=BookingStatus.REJECTED)
        make_booking(12, 14, user=admin_user)

        with pytest.raises(BookingConflictError):
            update_booking_status(
                booking_id=rejected.id,
                new_status=BookingStatus.CONFIRMED,
                user=admin_user,
            )

    def test_unknown_booking(self, admin_user):
        with pytest.raises(BookingNotFoundError):
            update_booking_status(
                booking_id=uuid4(),
                new_status=BookingStatus.CONFIRMED,
                user=admin_user,
            )


@pytest.mark.django_db
class TestDeleteBooking:
    """Tests for delete_booking."""

    def test_booker_can_delete(self, make_booking, member_user):
        booking = make_booking(10, 12)
        delete_booking(booking_id=booking.id, user=member_user)
        assert not Booking.objects.filter(id=booking.id).exists()

    def test_admin_can_delete(self, make_booking, property_owner):
        booking = make_booking(10, 12)
        delete_booking(booking_id=booking.id, user=property_owner)
        assert not Booking.objects.filter(id=booking.id).exists()

    def test_stranger_cannot_delete(self, make_booking, other_user):
        booking = make_booking(10, 12)
        with pytest.raises(InsufficientPermissionsError):
            delete_booking(booking_id=booking.id, user=other_user)


# =============================================================================
# Reads
# =============================================================================

@pytest.mark.django_db
class TestBookingReads:
    """Tests for read-only services."""

    def test_get_bookings_ordered_and_filtered(self, house, make_booking, member_user):
        late = make_booking(30, 32, status=BookingStatus.CONFIRMED)
        early = make_booking(10, 12)

        assert list(get_bookings(property_id=house.id, user=member_user)) == [early, late]
        assert list(get_bookings(property_id=house.id, user=member_user, status='confirmed')) == [late]

    def test_get_bookings_members_only(self, house, other_user):
        with pytest.raises(InsufficientPermissionsError):
            get_bookings(property_id=house.id, user=other_user)

    def test_get_booking_members_only(self, make_booking, other_user, admin_user):
        booking = make_booking(10, 12)

        assert get_booking(booking_id=booking.id, user=admin_user) == booking
        with pytest.raises(InsufficientPermissionsError):
            get_booking(booking_id=booking.id, user=other_user)

    def test_blocked_calendar_excludes_rejected(self, house, make_booking, member_user):
        make_booking(10, 12, status=BookingStatus.REJECTED)
        make_booking(20, 22)

        calendar = get_blocked_calendar(property_id=house.id, user=member_user)

        assert [(r.start, r.end) for r in calendar.ranges] == [(days_from_today(20), days_from_today(22))]
        assert calendar.before == days_from_today(0)

    def test_house_status(self, house, make_booking, member_user):
        current = make_booking(-1, 2, status=BookingStatus.CONFIRMED)
        make_booking(3, 4)
        upcoming = [make_booking(d, d + 1, status=BookingStatus.CONFIRMED) for d in (5, 7, 9, 11)]

        status = get_house_status(property_id=house.id, user=member_user)

        assert status.current == current
        assert status.upcoming == upcoming[:3]

    def test_quote(self, house, member_user):
        quote = get_booking_quote(
            property_id=house.id,
            user=member_user,
            start_date=days_from_today(1),
            end_date=days_from_today(2),
        )

        assert quote.total == Decimal('23600.00')

    def test_quote_invalid_range(self, house, member_user):
        with pytest.raises(InvalidBookingRangeError):
            get_booking_quote(
                property_id=house.id,
                user=member_user,
                start_date=days_from_today(2),
                end_date=days_from_today(2),
            )
