"""
Member tag service.

Deleting a tag leaves the shares that reference it untouched; the
allocation then counts them as 0 until they are reassigned.
"""

import logging
from decimal import Decimal
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.expenses.models import MemberTag

from .exceptions import TagNotFoundError, InvalidShareError
from .property_access import get_property, require_admin, require_member

logger = logging.getLogger(__name__)


def _validate_tag_values(share_percentage: Decimal, fixed_fee: Decimal) -> None:
    if not Decimal(0) <= Decimal(share_percentage) <= Decimal(100):
        raise InvalidShareError("Share percentage must be between 0 and 100")
    if Decimal(fixed_fee) < 0:
        raise InvalidShareError("Fixed fee cannot be negative")


def create_member_tag(
    *,
    property_id: UUID,
    user: User,
    name: str,
    share_percentage: Decimal,
    fixed_fee: Decimal = Decimal('0'),
    color: str = 'blue'
) -> MemberTag:
    """
    Create an allocation tag (admin only).

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If user is not admin
        InvalidShareError: If percentage or fee is out of range
    """
    property_obj = get_property(property_id)
    require_admin(property_obj, user, "create tags")
    _validate_tag_values(share_percentage, fixed_fee)

    tag = MemberTag.objects.create(
        property=property_obj,
        name=name,
        share_percentage=share_percentage,
        fixed_fee=fixed_fee,
        color=color or 'blue',
    )

    logger.info("Tag %s (%s%%) created in property %s", tag.id, share_percentage, property_obj.id)
    return tag


def get_member_tags(*, property_id: UUID, user: User) -> QuerySet[MemberTag]:
    """Tags of a property, by name (members only)."""
    property_obj = get_property(property_id)
    require_member(property_obj, user)
    return MemberTag.objects.filter(property=property_obj).order_by('name')


@transaction.atomic
def delete_member_tag(*, tag_id: UUID, user: User) -> None:
    """
    Delete a tag (admin only). Shares referencing it are kept.

    Raises:
        TagNotFoundError: If tag doesn't exist
        InsufficientPermissionsError: If user is not admin
    """
    try:
        tag = (
            MemberTag.objects
            .select_for_update()
            .select_related('property')
            .get(id=tag_id)
        )
    except MemberTag.DoesNotExist:
        raise TagNotFoundError(f"Tag with ID {tag_id} not found")

    require_admin(tag.property, user, "delete tags")

    logger.info("Tag %s deleted from property %s by %s", tag.id, tag.property_id, user.email)
    tag.delete()
