"""Reading and acknowledging a user's notifications."""

from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.notifications.models import Notification

from .exceptions import NotificationNotFoundError


def get_user_notifications(*, user: User, unread_only: bool = False) -> QuerySet[Notification]:
    """Return the user's notifications, newest first."""
    queryset = Notification.objects.filter(user=user)
    if unread_only:
        queryset = queryset.filter(is_read=False)
    return queryset.order_by('-created_at')


@transaction.atomic
def mark_as_read(*, notification_id: UUID, user: User) -> Notification:
    """
    Mark a single notification as read.

    Raises:
        NotificationNotFoundError: If it doesn't exist or isn't the user's
    """
    try:
        notification = (
            Notification.objects
            .select_for_update()
            .get(id=notification_id, user=user)
        )
    except Notification.DoesNotExist:
        raise NotificationNotFoundError(f"Notification with ID {notification_id} not found")

    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=['is_read'])

    return notification


def mark_all_as_read(*, user: User) -> int:
    """Mark every unread notification of the user as read; returns the count."""
    return Notification.objects.filter(user=user, is_read=False).update(is_read=True)
