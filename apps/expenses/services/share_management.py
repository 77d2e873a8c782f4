"""
Member share service.

Shares are upserted: there is never more than one share per
(property, member_email, tag_id). Writers lock the property row so the
lookup and the write are one step; the unique constraints on the table
catch anything that still slips through.
"""

import logging
from decimal import Decimal
from typing import Optional, Tuple
from uuid import UUID

from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User, normalize_member_email
from apps.expenses.models import MemberShare, MemberTag

from .exceptions import (
    ShareNotFoundError,
    TagNotFoundError,
    InvalidShareError,
    DuplicateShareError,
)
from .property_access import get_property, require_admin, require_member

logger = logging.getLogger(__name__)

# Marks "field not given" in partial updates, where None means "clear"
UNSET = object()


def _clean_email(email: str) -> str:
    normalized = normalize_member_email(email)
    try:
        validate_email(normalized)
    except ValidationError:
        raise InvalidShareError(f"'{email}' is not a valid email address")
    return normalized


def _validate_values(share_percentage: Optional[Decimal], custom_amount: Optional[Decimal]) -> None:
    if share_percentage is not None and not Decimal(0) <= Decimal(share_percentage) <= Decimal(100):
        raise InvalidShareError("Share percentage must be between 0 and 100")
    if custom_amount is not None and Decimal(custom_amount) < 0:
        raise InvalidShareError("Custom amount cannot be negative")


def _check_tag(property_obj, tag_id: Optional[UUID]) -> None:
    if tag_id is not None and not MemberTag.objects.filter(property=property_obj, id=tag_id).exists():
        raise TagNotFoundError(f"Tag with ID {tag_id} not found in this property")


def _find_share(property_obj, email: str, tag_id: Optional[UUID]) -> Optional[MemberShare]:
    queryset = MemberShare.objects.filter(property=property_obj, member_email=email)
    if tag_id is None:
        queryset = queryset.filter(tag_id__isnull=True)
    else:
        queryset = queryset.filter(tag_id=tag_id)
    return queryset.order_by('created_at').first()


@transaction.atomic
def create_member_share(
    *,
    property_id: UUID,
    user: User,
    member_email: str,
    tag_id: Optional[UUID] = None,
    share_percentage: Optional[Decimal] = None,
    custom_amount: Optional[Decimal] = None
) -> Tuple[MemberShare, bool]:
    """
    Create a share, or update the existing one for the same member and tag
    (admin only).

    The email is lowercased before any lookup. When a share already
    exists for (property, email, tag_id), its percentage and custom
    amount are overwritten and ``created`` is False.

    Args:
        property_id: UUID of the property
        user: Admin performing the change
        member_email: Member's email, any case
        tag_id: Tag the member belongs to (optional)
        share_percentage: Direct percentage of the pool (optional)
        custom_amount: Fixed monthly amount, overrides everything (optional)

    Returns:
        tuple: (MemberShare, created)

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If user is not admin
        InvalidShareError: If email or values are invalid
        TagNotFoundError: If tag_id is not a tag of this property
    """
    property_obj = get_property(property_id, lock=True)
    require_admin(property_obj, user, "change member shares")

    email = _clean_email(member_email)
    _validate_values(share_percentage, custom_amount)
    _check_tag(property_obj, tag_id)

    share = _find_share(property_obj, email, tag_id)
    created = share is None

    if created:
        try:
            with transaction.atomic():
                share = MemberShare.objects.create(
                    property=property_obj,
                    member_email=email,
                    tag_id=tag_id,
                    share_percentage=share_percentage,
                    custom_amount=custom_amount,
                )
        except IntegrityError:
            # Lost a race on a database without row locks; merge instead
            share = _find_share(property_obj, email, tag_id)
            created = False

    if not created:
        share.share_percentage = share_percentage
        share.custom_amount = custom_amount
        share.save(update_fields=['member_email', 'share_percentage', 'custom_amount', 'updated_at'])

    logger.info(
        "Share for %s in property %s %s (tag=%s)",
        email, property_obj.id, 'created' if created else 'merged', tag_id
    )
    return share, created


@transaction.atomic
def update_member_share(
    *,
    share_id: UUID,
    user: User,
    member_email=UNSET,
    tag_id=UNSET,
    share_percentage=UNSET,
    custom_amount=UNSET
) -> MemberShare:
    """
    Partially update a share (admin only).

    Only the given fields change; pass None to clear a field. The stored
    email is lowercased on every write, given or not.

    Raises:
        ShareNotFoundError: If share doesn't exist
        InsufficientPermissionsError: If user is not admin
        InvalidShareError: If email or values are invalid
        TagNotFoundError: If tag_id is not a tag of this property
        DuplicateShareError: If the new (email, tag) pair is already taken
    """
    try:
        share = MemberShare.objects.select_related('property').get(id=share_id)
    except MemberShare.DoesNotExist:
        raise ShareNotFoundError(f"Share with ID {share_id} not found")

    property_obj = get_property(share.property_id, lock=True)
    require_admin(property_obj, user, "change member shares")

    if member_email is not UNSET:
        share.member_email = _clean_email(member_email)
    if tag_id is not UNSET:
        _check_tag(property_obj, tag_id)
        share.tag_id = tag_id
    if share_percentage is not UNSET:
        share.share_percentage = share_percentage
    if custom_amount is not UNSET:
        share.custom_amount = custom_amount

    _validate_values(share.share_percentage, share.custom_amount)

    clash = _find_share(property_obj, normalize_member_email(share.member_email), share.tag_id)
    if clash is not None and clash.id != share.id:
        raise DuplicateShareError(
            f"{share.member_email} already has a share for this tag"
        )

    try:
        with transaction.atomic():
            share.save()
    except IntegrityError:
        raise DuplicateShareError(f"{share.member_email} already has a share for this tag")

    logger.info("Share %s updated by %s", share.id, user.email)
    return share


@transaction.atomic
def delete_member_share(*, share_id: UUID, user: User) -> None:
    """
    Delete a share (admin only).

    Raises:
        ShareNotFoundError: If share doesn't exist
        InsufficientPermissionsError: If user is not admin
    """
    try:
        share = (
            MemberShare.objects
            .select_for_update()
            .select_related('property')
            .get(id=share_id)
        )
    except MemberShare.DoesNotExist:
        raise ShareNotFoundError(f"Share with ID {share_id} not found")

    require_admin(share.property, user, "change member shares")

    logger.info("Share %s of %s deleted by %s", share.id, share.member_email, user.email)
    share.delete()


def get_member_shares(*, property_id: UUID, user: User) -> QuerySet[MemberShare]:
    """Shares of a property, by email (members only)."""
    property_obj = get_property(property_id)
    require_member(property_obj, user)
    return MemberShare.objects.filter(property=property_obj).order_by('member_email', 'created_at')
