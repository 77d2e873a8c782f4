"""
Dashboard Aggregator
====================

Read-only rollups across every property a user belongs to.

Classes:
    DashboardQueries: Static methods for the dashboard endpoints.

Monthly summary, per property the user administers (by id) or is on the
roster of (by email):

    - ``shared_amount``: the user's entry in the property's expense
      allocation for the month. The allocation always runs over the
      full roster so tag cohorts are sized correctly.
    - ``booking_amount``: ``total_cost`` of the user's confirmed bookings
      whose stay, both ends included, touches the month.

Properties where both amounts are zero are left out.

Example::

    from apps.dashboard.aggregator import DashboardQueries

    summary = DashboardQueries.monthly_summary(user, period='2025-03')
    summary['grand_total']   # Decimal('61400.00')
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db.models import Sum
from django.utils import timezone

from apps.accounts.models import User
from apps.bookings.conflicts import HouseStatus
from apps.bookings.models import Booking, BookingStatus
from apps.bookings.services import get_house_status
from apps.bookings.services import exceptions as booking_errors
from apps.expenses.allocation import Month
from apps.expenses.services import compute_property_allocation
from apps.properties.services import get_user_properties

from .exceptions import InvalidPeriodError, PropertyNotFoundError, InsufficientPermissionsError

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


class DashboardQueries:
    """
    Queries behind the dashboard endpoints.

    All methods return plain dictionaries or dataclasses, never querysets.
    """

    @staticmethod
    def parse_period(period: Optional[str]) -> Month:
        """
        Month for a ``YYYY-MM`` string; the current month when empty.

        Raises:
            InvalidPeriodError: If period is not YYYY-MM
        """
        if not period:
            return Month.from_date(timezone.localdate())
        try:
            return Month.parse(period)
        except ValueError:
            raise InvalidPeriodError("Invalid period format. Use YYYY-MM")

    @staticmethod
    def booking_totals(user: User, month: Month) -> dict:
        """Confirmed booking totals of the user per property id for the month."""
        rows = (
            Booking.objects
            .filter(
                user=user,
                status=BookingStatus.CONFIRMED,
                start_date__lte=month.last_day,
                end_date__gte=month.first_day,
            )
            .values('property_id')
            .annotate(total=Sum('total_cost'))
        )
        return {row['property_id']: row['total'] or ZERO for row in rows}

    @staticmethod
    def monthly_summary(user: User, period: Optional[str] = None) -> dict:
        """
        What the user owes for one month, per property.

        Args:
            user: The user to summarize
            period: Month in YYYY-MM format; defaults to the current month

        Returns:
            dict: A dictionary containing:
                - period (str): The month summarized.
                - items (list): One dict per property with a non-zero
                  total: property_id, property_name, shared_amount,
                  booking_amount, total.
                - grand_total (Decimal): Sum of the item totals.

        Raises:
            InvalidPeriodError: If period is not YYYY-MM
        """
        month = DashboardQueries.parse_period(period)
        email = user.get_roster_email()
        bookings = DashboardQueries.booking_totals(user, month)

        items = []
        for property_obj in get_user_properties(user=user).order_by('name'):
            allocation = compute_property_allocation(property_obj, month)
            shared = allocation.payments.get(email, ZERO)
            booked = bookings.get(property_obj.id, ZERO)
            total = shared + booked

            if total <= 0:
                continue

            items.append({
                'property_id': property_obj.id,
                'property_name': property_obj.name,
                'shared_amount': shared,
                'booking_amount': booked,
                'total': total,
            })

        grand_total = sum((item['total'] for item in items), ZERO)
        logger.debug("Monthly summary for %s in %s: %s properties, %s", email, month, len(items), grand_total)

        return {
            'period': str(month),
            'items': items,
            'grand_total': grand_total,
        }

    @staticmethod
    def house_status(property_id: UUID, user: User, today: Optional[date] = None) -> HouseStatus:
        """
        Current occupant and next confirmed stays of a property.

        Raises:
            PropertyNotFoundError: If property doesn't exist
            InsufficientPermissionsError: If user is not a member
        """
        try:
            return get_house_status(property_id=property_id, user=user, today=today)
        except booking_errors.PropertyNotFoundError as e:
            raise PropertyNotFoundError(str(e)) from e
        except booking_errors.InsufficientPermissionsError as e:
            raise InsufficientPermissionsError(str(e)) from e
