import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.notifications.models import Notification, NotificationType


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def notifications(user, other_user):
    """Two unread and one read notification for user, one for other_user."""
    return [
        Notification.objects.create(user=user, type=NotificationType.BOOKING_APPROVED, data={'booking_id': '1'}),
        Notification.objects.create(user=user, type=NotificationType.MEMBER_ADDED, data={}),
        Notification.objects.create(user=user, type=NotificationType.EXPENSE_CREATED, is_read=True),
        Notification.objects.create(user=other_user, type=NotificationType.BOOKING_REQUEST),
    ]
