"""
Notification delivery.

Delivery is fire-and-forget: callers notify after a state transition and
never depend on the outcome. Failures are logged and swallowed here so a
broken notification can't undo the booking or expense that triggered it.
"""

import logging
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction, DatabaseError

from apps.notifications.models import Notification

logger = logging.getLogger(__name__)


def create_notification(
    *,
    user_id: UUID,
    type: str,
    data: Optional[dict] = None
) -> Optional[Notification]:
    """
    Store one notification for a user.

    Args:
        user_id: Recipient's user ID
        type: One of NotificationType values
        data: Event payload (IDs and names used for rendering)

    Returns:
        Created Notification, or None if delivery failed
    """
    try:
        # Savepoint so a failed insert doesn't poison the caller's transaction
        with transaction.atomic():
            return Notification.objects.create(
                user_id=user_id,
                type=type,
                data=data or {},
            )
    except DatabaseError:
        logger.exception("Failed to deliver %s notification to user %s", type, user_id)
        return None


def notify_users(
    *,
    user_ids: Iterable[UUID],
    type: str,
    data: Optional[dict] = None,
    exclude: Optional[Iterable[UUID]] = None
) -> int:
    """
    Notify several users about the same event.

    Args:
        user_ids: Recipients
        type: One of NotificationType values
        data: Event payload
        exclude: User IDs to skip (usually the actor)

    Returns:
        Number of notifications delivered
    """
    skipped = {str(user_id) for user_id in (exclude or [])}
    delivered = 0
    seen = set()

    for user_id in user_ids:
        key = str(user_id)
        if key in skipped or key in seen:
            continue
        seen.add(key)
        if create_notification(user_id=user_id, type=type, data=data) is not None:
            delivered += 1

    return delivered


def notify_on_commit(*, user_ids, type: str, data: Optional[dict] = None, exclude=None) -> None:
    """Schedule ``notify_users`` for after the current transaction commits."""
    recipients = list(user_ids)
    excluded = list(exclude or [])
    transaction.on_commit(
        lambda: notify_users(user_ids=recipients, type=type, data=data, exclude=excluded)
    )
