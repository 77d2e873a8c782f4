"""
Shared expense service.

Expenses are created and deleted by admins; there is no edit.
"""

import logging
from decimal import Decimal
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.expenses.models import Frequency, SharedExpense
from apps.notifications.models import NotificationType
from apps.notifications.services import notify_on_commit

from .exceptions import ExpenseNotFoundError, InvalidShareError
from .property_access import get_property, require_admin, require_member

logger = logging.getLogger(__name__)


@transaction.atomic
def create_shared_expense(
    *,
    property_id: UUID,
    user: User,
    name: str,
    amount: Decimal,
    frequency: str = Frequency.MONTHLY
) -> SharedExpense:
    """
    Add an expense to the property's pool (admin only).

    Registered roster members other than the creator are notified.

    Raises:
        PropertyNotFoundError: If property doesn't exist
        InsufficientPermissionsError: If user is not admin
        InvalidShareError: If amount is negative or frequency unknown
    """
    property_obj = get_property(property_id)
    require_admin(property_obj, user, "add expenses")

    if Decimal(amount) < 0:
        raise InvalidShareError("Expense amount cannot be negative")
    if frequency not in Frequency.values:
        raise InvalidShareError(f"Unknown frequency '{frequency}'")

    expense = SharedExpense.objects.create(
        property=property_obj,
        name=name,
        amount=amount,
        frequency=frequency,
        created_by=user,
    )

    logger.info(
        "Expense %s (%s %s) added to property %s by %s",
        expense.id, amount, frequency, property_obj.id, user.email
    )

    recipients = User.objects.filter(
        email__in=property_obj.get_allowed_emails(),
        is_active=True,
    ).values_list('id', flat=True)
    notify_on_commit(
        user_ids=recipients,
        type=NotificationType.EXPENSE_CREATED,
        data={
            'expense_id': str(expense.id),
            'expense_name': expense.name,
            'amount': str(expense.amount),
            'property_id': str(property_obj.id),
            'property_name': property_obj.name,
        },
        exclude=[user.id],
    )

    return expense


def get_shared_expenses(*, property_id: UUID, user: User) -> QuerySet[SharedExpense]:
    """All expenses of a property, newest first (members only)."""
    property_obj = get_property(property_id)
    require_member(property_obj, user)
    return SharedExpense.objects.filter(property=property_obj).order_by('-created_at')


@transaction.atomic
def delete_shared_expense(*, expense_id: UUID, user: User) -> None:
    """
    Delete an expense (admin only).

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        InsufficientPermissionsError: If user is not admin
    """
    try:
        expense = (
            SharedExpense.objects
            .select_for_update()
            .select_related('property')
            .get(id=expense_id)
        )
    except SharedExpense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")

    require_admin(expense.property, user, "delete expenses")

    logger.info("Expense %s deleted by %s", expense.id, user.email)
    expense.delete()
