import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestNotificationsApi:
    """Tests for /api/notifications/"""

    def test_requires_auth(self, api_client):
        response = api_client.get(reverse('notifications:notification-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_own(self, authenticated_client, notifications):
        response = authenticated_client.get(reverse('notifications:notification-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 3

    def test_list_unread(self, authenticated_client, notifications):
        response = authenticated_client.get(reverse('notifications:notification-list'), {'unread': 'true'})

        assert response.data['count'] == 2

    def test_mark_read(self, authenticated_client, notifications):
        url = reverse('notifications:notification-read', args=[notifications[0].id])
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_read'] is True

    def test_mark_read_other_users(self, authenticated_client, notifications):
        url = reverse('notifications:notification-read', args=[notifications[3].id])
        response = authenticated_client.post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_mark_all_read(self, authenticated_client, notifications):
        response = authenticated_client.post(reverse('notifications:notification-read-all'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'updated': 2}
