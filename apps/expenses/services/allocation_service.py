"""Loads a property's expense data and runs the allocation for a month."""

from typing import Optional
from uuid import UUID

from django.utils import timezone

from apps.accounts.models import User
from apps.expenses.allocation import AllocationResult, Month, allocate
from apps.expenses.models import MemberShare, MemberTag, SharedExpense
from apps.properties.models import Property

from .property_access import get_property, require_member


def compute_property_allocation(property_obj: Property, month: Optional[Month] = None) -> AllocationResult:
    """Allocation over the property's full roster. No permission check."""
    month = month or Month.from_date(timezone.localdate())
    return allocate(
        expenses=SharedExpense.objects.filter(property=property_obj),
        shares=MemberShare.objects.filter(property=property_obj),
        tags=MemberTag.objects.filter(property=property_obj),
        active_emails=property_obj.get_allowed_emails(),
        month=month,
        tz=timezone.get_current_timezone(),
    )


def get_property_allocation(
    *,
    property_id: UUID,
    user: User,
    month: Optional[Month] = None
) -> AllocationResult:
    """
    What every roster member owes for ``month`` (members only).

    Defaults to the current month.

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If user is not a member
    """
    property_obj = get_property(property_id)
    require_member(property_obj, user)
    return compute_property_allocation(property_obj, month)
