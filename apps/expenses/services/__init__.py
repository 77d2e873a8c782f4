"""
Expenses app services layer.

Shared expenses, member tags and member shares, plus the monthly
allocation. The arithmetic itself lives in ``apps.expenses.allocation``.
"""

from .exceptions import (
    ExpensesServiceError,
    PropertyNotFoundError,
    InsufficientPermissionsError,
    ExpenseNotFoundError,
    TagNotFoundError,
    ShareNotFoundError,
    InvalidShareError,
    DuplicateShareError,
)

from .expense_management import (
    create_shared_expense,
    get_shared_expenses,
    delete_shared_expense,
)

from .tag_management import (
    create_member_tag,
    get_member_tags,
    delete_member_tag,
)

from .share_management import (
    UNSET,
    create_member_share,
    update_member_share,
    delete_member_share,
    get_member_shares,
)

from .allocation_service import (
    compute_property_allocation,
    get_property_allocation,
)


__all__ = [
    # Exceptions
    'ExpensesServiceError',
    'PropertyNotFoundError',
    'InsufficientPermissionsError',
    'ExpenseNotFoundError',
    'TagNotFoundError',
    'ShareNotFoundError',
    'InvalidShareError',
    'DuplicateShareError',

    # Expenses
    'create_shared_expense',
    'get_shared_expenses',
    'delete_shared_expense',

    # Tags
    'create_member_tag',
    'get_member_tags',
    'delete_member_tag',

    # Shares
    'UNSET',
    'create_member_share',
    'update_member_share',
    'delete_member_share',
    'get_member_shares',

    # Allocation
    'compute_property_allocation',
    'get_property_allocation',
]
