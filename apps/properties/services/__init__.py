"""
Properties app services layer.

All business logic for properties, rosters, admins and settings.
"""

from .exceptions import (
    PropertiesServiceError,
    PropertyNotFoundError,
    InsufficientPermissionsError,
    DuplicateMemberError,
    NotMemberError,
    InvalidEmailError,
    CannotRemoveOwnerError,
)

from .property_management import (
    create_property,
    get_property_by_id,
    get_user_properties,
    check_property_admin,
    lock_property,
    update_property,
    update_property_admins,
)

from .roster_management import (
    get_allowed_emails,
    add_allowed_email,
    remove_allowed_email,
    update_allowed_emails,
)

from .settings_management import (
    get_property_settings,
    update_property_settings,
)


__all__ = [
    # Exceptions
    'PropertiesServiceError',
    'PropertyNotFoundError',
    'InsufficientPermissionsError',
    'DuplicateMemberError',
    'NotMemberError',
    'InvalidEmailError',
    'CannotRemoveOwnerError',

    # Property management
    'create_property',
    'get_property_by_id',
    'get_user_properties',
    'check_property_admin',
    'lock_property',
    'update_property',
    'update_property_admins',

    # Roster management
    'get_allowed_emails',
    'add_allowed_email',
    'remove_allowed_email',
    'update_allowed_emails',

    # Settings
    'get_property_settings',
    'update_property_settings',
]
