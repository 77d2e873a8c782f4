"""
Property management service.

Handles property creation, lookup and admin-set changes.
"""

import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User, normalize_member_email
from apps.properties.models import Property, PropertyMember
from apps.properties.settings_schema import default_property_settings

from .exceptions import (
    PropertyNotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def create_property(*, name: str, owner: User) -> Property:
    """
    Create a new property.

    The creator becomes owner and first admin, and the creator's email
    is the first roster entry.

    Args:
        name: Property name
        owner: User creating the property

    Returns:
        Created Property instance
    """
    property_obj = Property.objects.create(
        name=name,
        owner=owner,
        settings=default_property_settings(),
    )
    property_obj.admins.add(owner)
    PropertyMember.objects.create(
        property=property_obj,
        email=normalize_member_email(owner.email),
    )

    logger.info("Property %s created by %s", property_obj.id, owner.email)
    return property_obj


def get_property_by_id(*, property_id: UUID) -> Property:
    """
    Get a property by ID.

    Raises:
        PropertyNotFoundError: If property doesn't exist
    """
    try:
        return (
            Property.objects
            .select_related('owner')
            .prefetch_related('admins', 'members')
            .get(id=property_id)
        )
    except Property.DoesNotExist:
        raise PropertyNotFoundError(f"Property with ID {property_id} not found")


def get_user_properties(*, user: User) -> QuerySet[Property]:
    """
    Properties the user can see: administered ones plus those whose
    roster holds the user's email.
    """
    email = user.get_roster_email()
    return (
        Property.objects
        .filter(Q(admins=user) | Q(members__email=email))
        .select_related('owner')
        .distinct()
    )


def check_property_admin(*, property_id: UUID, user: User) -> bool:
    """Return whether the user administers the property. Never raises."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    return Property.objects.filter(id=property_id, admins=user).exists()


def lock_property(property_id: UUID) -> Property:
    """
    Fetch a property row with a write lock. Must run inside a transaction.

    Raises:
        PropertyNotFoundError: If property doesn't exist
    """
    try:
        return (
            Property.objects
            .select_for_update()
            .get(id=property_id)
        )
    except Property.DoesNotExist:
        raise PropertyNotFoundError(f"Property with ID {property_id} not found")


@transaction.atomic
def update_property(
    *,
    property_id: UUID,
    user: User,
    name: Optional[str] = None
) -> Property:
    """
    Update property details (admin only).

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If user is not admin
    """
    property_obj = lock_property(property_id)

    if not property_obj.is_admin(user):
        raise InsufficientPermissionsError("Only property admins can update the property")

    update_fields = ['updated_at']

    if name is not None:
        property_obj.name = name
        update_fields.append('name')

    property_obj.save(update_fields=update_fields)

    return property_obj


@transaction.atomic
def update_property_admins(
    *,
    property_id: UUID,
    admin_ids: List[UUID],
    updated_by: User
) -> List[User]:
    """
    Replace the admin set (admin only).

    The owner always stays an admin. Unknown user IDs are ignored.

    Returns:
        New list of admins

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If updated_by is not admin
    """
    property_obj = lock_property(property_id)

    if not property_obj.is_admin(updated_by):
        raise InsufficientPermissionsError("Only property admins can change admins")

    admins = list(User.objects.filter(id__in=admin_ids))
    if property_obj.owner_id not in {admin.id for admin in admins}:
        admins.append(property_obj.owner)

    property_obj.admins.set(admins)
    property_obj.save(update_fields=['updated_at'])

    logger.info(
        "Property %s admins set to %d users by %s",
        property_obj.id, len(admins), updated_by.email
    )
    return admins
