"""Property settings service."""

import logging
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.properties.settings_schema import normalize_settings

from .exceptions import InsufficientPermissionsError, NotMemberError
from .property_management import get_property_by_id, lock_property

logger = logging.getLogger(__name__)


def get_property_settings(*, property_id: UUID, user: User) -> dict:
    """
    Return the normalized settings document (members only).

    Raises:
        PropertyNotFoundError: If property doesn't exist
        NotMemberError: If user is not a member
    """
    property_obj = get_property_by_id(property_id=property_id)

    if not property_obj.has_member(user):
        raise NotMemberError("You are not a member of this property")

    return property_obj.get_settings()


@transaction.atomic
def update_property_settings(
    *,
    property_id: UUID,
    settings: dict,
    updated_by: User
) -> dict:
    """
    Replace the settings document (admin only).

    The document is normalized before it is stored, so partial or legacy
    input is completed with defaults.

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If updated_by is not admin
    """
    property_obj = lock_property(property_id)

    if not property_obj.is_admin(updated_by):
        raise InsufficientPermissionsError("Only property admins can change settings")

    property_obj.settings = normalize_settings(settings)
    property_obj.save(update_fields=['settings', 'updated_at'])

    logger.info("Settings of property %s updated by %s", property_obj.id, updated_by.email)
    return property_obj.settings
