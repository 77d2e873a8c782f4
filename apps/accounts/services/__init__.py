"""Services for accounts: registration, login and the current-user profile."""

from .exceptions import (
    AccountsServiceError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InactiveAccountError,
)
from .registration import register_user
from .authentication import authenticate_user
from .profile import get_user_houses, update_profile

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'EmailAlreadyRegisteredError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    # Services
    'register_user',
    'authenticate_user',
    'get_user_houses',
    'update_profile',
]
