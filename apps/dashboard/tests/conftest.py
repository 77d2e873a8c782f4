import pytest
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.bookings.models import Booking, BookingStatus
from apps.expenses.models import MemberShare, MemberTag, SharedExpense
from apps.properties.services import create_property


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def property_owner(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Property Owner',
    )


@pytest.fixture
def member_user(db):
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Roster Member',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def house(property_owner, member_user):
    """
    Property with a 100000 monthly expense since January 2025, split by
    a 50% tag between the owner and the member.
    """
    house = create_property(name='Beach House', owner=property_owner)
    house.members.create(email='member@example.com')

    expense = SharedExpense.objects.create(property=house, name='Upkeep', amount=Decimal('100000'))
    SharedExpense.objects.filter(id=expense.id).update(
        created_at=datetime(2025, 1, 10, 12, 0, tzinfo=dt_timezone.utc)
    )

    tag = MemberTag.objects.create(property=house, name='Family', share_percentage=Decimal('50'))
    MemberShare.objects.create(property=house, member_email='owner@example.com', tag_id=tag.id)
    MemberShare.objects.create(property=house, member_email='member@example.com', tag_id=tag.id)
    return house


@pytest.fixture
def cabin(property_owner, member_user):
    """Second property with the member on the roster but nothing to pay."""
    cabin = create_property(name='Mountain Cabin', owner=property_owner)
    cabin.members.create(email='member@example.com')
    return cabin


@pytest.fixture
def make_booking(member_user):
    def _make(property_obj, start, end, status=BookingStatus.CONFIRMED, total_cost='10000', user=None):
        booker = user or member_user
        return Booking.objects.create(
            property=property_obj,
            user=booker,
            user_name=booker.get_display_name(),
            start_date=start,
            end_date=end,
            total_cost=Decimal(total_cost),
            status=status,
        )
    return _make


@pytest.fixture
def march():
    return '2025-03'


@pytest.fixture
def owner_client(property_owner):
    return _client_for(property_owner)


@pytest.fixture
def member_client(member_user):
    return _client_for(member_user)


@pytest.fixture
def other_client(other_user):
    return _client_for(other_user)
