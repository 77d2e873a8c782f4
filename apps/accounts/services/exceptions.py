"""
Domain-specific exceptions for accounts services.

Views map them to HTTP responses: registration errors to 400, bad
credentials to 401, deactivated accounts to 403.
"""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class EmailAlreadyRegisteredError(AccountsServiceError):
    """Raised when an account already uses the (normalized) email."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when the email/password pair does not match an account."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when a deactivated account tries to log in."""
    pass
