"""
Domain-specific exceptions for expenses app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class ExpensesServiceError(Exception):
    """Base exception for all expenses service errors."""
    pass


class PropertyNotFoundError(ExpensesServiceError):
    """Raised when the property does not exist."""
    pass


class InsufficientPermissionsError(ExpensesServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass


class ExpenseNotFoundError(ExpensesServiceError):
    """Raised when a shared expense does not exist."""
    pass


class TagNotFoundError(ExpensesServiceError):
    """Raised when a member tag does not exist in the property."""
    pass


class ShareNotFoundError(ExpensesServiceError):
    """Raised when a member share does not exist."""
    pass


class InvalidShareError(ExpensesServiceError):
    """Raised when share values are out of range or the email is malformed."""
    pass


class DuplicateShareError(ExpensesServiceError):
    """Raised when an edit would collide with another share of the same member and tag."""
    pass
