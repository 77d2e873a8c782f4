import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.bookings.models import Booking, BookingStatus
from apps.properties.services import create_property


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


def days_from_today(days):
    """A date relative to today, so tests never book in the past."""
    return timezone.localdate() + timedelta(days=days)


@pytest.fixture
def property_owner(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Property Owner',
    )


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Property Admin',
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
def house(property_owner, admin_user, member_user):
    """Property with owner, second admin and a roster member."""
    house = create_property(name='Beach House', owner=property_owner)
    house.admins.add(admin_user)
    house.members.create(email='admin@example.com')
    house.members.create(email='member@example.com')
    house.settings = {
        'prices': {'adult_per_day': 3600, 'child_per_day': 1000, 'currency': 'CLP'},
        'limits': {'child_max_age': 6, 'min_days_to_book': 1},
        'fixed_costs': [
            {'id': 'fc-clean', 'name': 'Cleaning', 'value': 20000, 'is_optional': False},
            {'id': 'fc-linen', 'name': 'Linen', 'value': 5000, 'is_optional': True},
        ],
    }
    house.save()
    return house


@pytest.fixture
def make_booking(house, member_user):
    """Factory for bookings written straight to the database."""
    def _make(start_offset, end_offset, status=BookingStatus.PENDING, user=None, total_cost='10000'):
        booker = user or member_user
        return Booking.objects.create(
            property=house,
            user=booker,
            user_name=booker.get_display_name(),
            start_date=days_from_today(start_offset),
            end_date=days_from_today(end_offset),
            total_cost=Decimal(total_cost),
            status=status,
        )
    return _make


@pytest.fixture
def owner_client(property_owner):
    return _client_for(property_owner)


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def member_client(member_user):
    return _client_for(member_user)


@pytest.fixture
def other_client(other_user):
    return _client_for(other_user)


@pytest.fixture
def api_client_anon():
    """Return an unauthenticated API client."""
    return APIClient()
