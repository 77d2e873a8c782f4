"""
Domain-specific exceptions for properties app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class PropertiesServiceError(Exception):
    """Base exception for all properties service errors."""
    pass


class PropertyNotFoundError(PropertiesServiceError):
    """Raised when a property does not exist or is inaccessible."""
    pass


class InsufficientPermissionsError(PropertiesServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass


class DuplicateMemberError(PropertiesServiceError):
    """Raised when an email is already on the property roster."""
    pass


class NotMemberError(PropertiesServiceError):
    """Raised when an email is not on the property roster."""
    pass


class InvalidEmailError(PropertiesServiceError):
    """Raised when a roster email is malformed."""
    pass


class CannotRemoveOwnerError(PropertiesServiceError):
    """Raised when attempting to drop the owner from the roster or admins."""
    pass
