"""
Roster management service.

The roster is the list of emails allowed into a property. Emails are
compared case-insensitively and stored lowercased. The owner's email can
never leave the roster.
"""

import logging
from typing import List
from uuid import UUID

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction, IntegrityError

from apps.accounts.models import User, normalize_member_email
from apps.notifications.models import NotificationType
from apps.notifications.services import notify_on_commit
from apps.properties.models import PropertyMember

from .exceptions import (
    InsufficientPermissionsError,
    DuplicateMemberError,
    NotMemberError,
    InvalidEmailError,
    CannotRemoveOwnerError,
)
from .property_management import lock_property

logger = logging.getLogger(__name__)


def _clean_email(email: str) -> str:
    normalized = normalize_member_email(email)
    try:
        validate_email(normalized)
    except ValidationError:
        raise InvalidEmailError(f"'{email}' is not a valid email address")
    return normalized


def _notify_member_added(property_obj, emails: List[str]) -> None:
    user_ids = list(
        User.objects
        .filter(email__in=emails, is_active=True)
        .values_list('id', flat=True)
    )
    if user_ids:
        notify_on_commit(
            user_ids=user_ids,
            type=NotificationType.MEMBER_ADDED,
            data={'property_id': str(property_obj.id), 'property_name': property_obj.name},
        )


def get_allowed_emails(*, property_id: UUID) -> List[str]:
    """Return the property's roster, sorted."""
    return list(
        PropertyMember.objects
        .filter(property_id=property_id)
        .order_by('email')
        .values_list('email', flat=True)
    )


@transaction.atomic
def add_allowed_email(
    *,
    property_id: UUID,
    email: str,
    added_by: User
) -> PropertyMember:
    """
    Add an email to the roster (admin only).

    If the email belongs to a registered user, they get a
    ``member_added`` notification once the transaction commits.

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If added_by is not admin
        InvalidEmailError: If email is malformed
        DuplicateMemberError: If the email is already on the roster
    """
    property_obj = lock_property(property_id)

    if not property_obj.is_admin(added_by):
        raise InsufficientPermissionsError("Only property admins can add members")

    normalized = _clean_email(email)

    if PropertyMember.objects.filter(property=property_obj, email=normalized).exists():
        raise DuplicateMemberError(f"{normalized} is already a member of {property_obj.name}")

    try:
        with transaction.atomic():
            member = PropertyMember.objects.create(property=property_obj, email=normalized)
    except IntegrityError:
        raise DuplicateMemberError(f"{normalized} is already a member of {property_obj.name}")

    logger.info("Added %s to property %s", normalized, property_obj.id)
    _notify_member_added(property_obj, [normalized])
    return member


@transaction.atomic
def remove_allowed_email(
    *,
    property_id: UUID,
    email: str,
    removed_by: User
) -> None:
    """
    Remove an email from the roster (admin only).

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If removed_by is not admin
        CannotRemoveOwnerError: If email is the owner's
        NotMemberError: If email is not on the roster
    """
    property_obj = lock_property(property_id)

    if not property_obj.is_admin(removed_by):
        raise InsufficientPermissionsError("Only property admins can remove members")

    normalized = normalize_member_email(email)

    if normalized == normalize_member_email(property_obj.owner.email):
        raise CannotRemoveOwnerError("Cannot remove the property owner")

    deleted, _ = PropertyMember.objects.filter(property=property_obj, email=normalized).delete()
    if not deleted:
        raise NotMemberError(f"{normalized} is not a member of {property_obj.name}")

    logger.info("Removed %s from property %s", normalized, property_obj.id)


@transaction.atomic
def update_allowed_emails(
    *,
    property_id: UUID,
    emails: List[str],
    updated_by: User
) -> List[str]:
    """
    Replace the whole roster (admin only).

    Emails are normalized and deduplicated; the owner's email is always
    kept. Newly added registered users are notified.

    Returns:
        New roster, sorted

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If updated_by is not admin
        InvalidEmailError: If any email is malformed
    """
    property_obj = lock_property(property_id)

    if not property_obj.is_admin(updated_by):
        raise InsufficientPermissionsError("Only property admins can change members")

    wanted = {_clean_email(email) for email in emails}
    wanted.add(normalize_member_email(property_obj.owner.email))

    current = set(
        PropertyMember.objects
        .filter(property=property_obj)
        .values_list('email', flat=True)
    )

    removed = current - wanted
    added = sorted(wanted - current)

    if removed:
        PropertyMember.objects.filter(property=property_obj, email__in=removed).delete()
    for email in added:
        PropertyMember.objects.create(property=property_obj, email=email)

    logger.info(
        "Roster of property %s updated by %s: +%d -%d",
        property_obj.id, updated_by.email, len(added), len(removed)
    )
    if added:
        _notify_member_added(property_obj, added)

    return sorted(wanted)
