import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User
from apps.properties.services import create_property


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        response = api_client.post(reverse('accounts:register'), {
            'email': 'Mixed.Case@Example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'display_name': 'New User',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert 'access' in response.data['tokens']
        assert 'refresh' in response.data['tokens']
        assert response.data['user']['email'] == 'mixed.case@example.com'
        assert User.objects.filter(email='mixed.case@example.com').exists()

    def test_register_duplicate_email(self, api_client, user):
        response = api_client.post(reverse('accounts:register'), {
            'email': 'TestUser@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_register_password_mismatch(self, api_client):
        response = api_client.post(reverse('accounts:register'), {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data

    def test_register_weak_password(self, api_client):
        response = api_client.post(reverse('accounts:register'), {
            'email': 'weak@example.com',
            'password': '123',
            'password_confirm': '123',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        response = api_client.post(reverse('accounts:login'), {'email': user.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['tokens']
        assert response.data['user']['email'] == user.email

    def test_login_wrong_password(self, api_client, user):
        response = api_client.post(reverse('accounts:login'), {'email': user.email, 'password': 'WrongPass123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_inactive_account(self, api_client, user_inactive):
        response = api_client.post(
            reverse('accounts:login'),
            {'email': user_inactive.email, 'password': 'TestPass123!'}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


# =============================================================================
# Current user
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for /api/auth/user/"""

    def test_profile_with_houses(self, authenticated_client, user):
        create_property(name='Beach House', owner=user)

        response = authenticated_client.get(reverse('accounts:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['email'] == user.email
        assert [h['name'] for h in response.data['houses']] == ['Beach House']
        assert response.data['houses'][0]['is_owner'] is True

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('accounts:current-user'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_rename(self, authenticated_client, user):
        response = authenticated_client.patch(reverse('accounts:current-user'), {'display_name': 'Renamed'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['user']['display_name'] == 'Renamed'
        user.refresh_from_db()
        assert user.display_name == 'Renamed'
