import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.expenses.models import MemberTag
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
    """Property whose roster is the owner, a registered member and a guest email."""
    house = create_property(name='Lake House', owner=property_owner)
    house.members.create(email='member@example.com')
    house.members.create(email='guest@example.com')
    return house


@pytest.fixture
def family_tag(house):
    return MemberTag.objects.create(
        property=house,
        name='Family',
        share_percentage=Decimal('50'),
        fixed_fee=Decimal('0'),
    )


@pytest.fixture
def owner_client(property_owner):
    return _client_for(property_owner)


@pytest.fixture
def member_client(member_user):
    return _client_for(member_user)


@pytest.fixture
def other_client(other_user):
    return _client_for(other_user)
