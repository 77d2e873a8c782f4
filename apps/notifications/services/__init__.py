"""
Notifications app services layer.

The rest of the project only needs ``create_notification``,
``notify_users`` and ``notify_on_commit``; the inbox functions back the
notifications API.
"""

from .exceptions import (
    NotificationsServiceError,
    NotificationNotFoundError,
)

from .delivery import (
    create_notification,
    notify_users,
    notify_on_commit,
)

from .inbox import (
    get_user_notifications,
    mark_as_read,
    mark_all_as_read,
)


__all__ = [
    # Exceptions
    'NotificationsServiceError',
    'NotificationNotFoundError',

    # Delivery
    'create_notification',
    'notify_users',
    'notify_on_commit',

    # Inbox
    'get_user_notifications',
    'mark_as_read',
    'mark_all_as_read',
]
