import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.properties.services import create_property


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def property_owner(db):
    """Create and return the property owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Property Owner',
    )


@pytest.fixture
def admin_user(db):
    """Create and return a second admin."""
    return User.objects.create_user(
        email='admin@example.com',
        password='TestPass123!',
        display_name='Property Admin',
    )


@pytest.fixture
def member_user(db):
    """Create and return a roster member."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Roster Member',
    )


@pytest.fixture
def other_user(db):
    """Create and return a user with no access."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def house(property_owner):
    """Property with only the owner."""
    return create_property(name='Beach House', owner=property_owner)


@pytest.fixture
def house_with_members(house, admin_user, member_user):
    """Property with owner, a second admin and a roster member (mixed case on purpose)."""
    house.admins.add(admin_user)
    house.members.create(email='Admin@Example.com')
    house.members.create(email='MEMBER@example.com')
    return house


@pytest.fixture
def authenticated_client(property_owner):
    """Return API client authenticated as the owner."""
    return _client_for(property_owner)


@pytest.fixture
def admin_client(admin_user):
    """Return API client authenticated as the second admin."""
    return _client_for(admin_user)


@pytest.fixture
def member_client(member_user):
    """Return API client authenticated as a roster member."""
    return _client_for(member_user)


@pytest.fixture
def other_client(other_user):
    """Return API client authenticated as an outsider."""
    return _client_for(other_user)
