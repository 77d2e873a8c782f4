"""Email/password login."""

import logging

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User, normalize_member_email

from .exceptions import InvalidCredentialsError, InactiveAccountError

logger = logging.getLogger(__name__)

_BAD_CREDENTIALS = "Invalid email or password"


@transaction.atomic
def authenticate_user(*, email: str, password: str) -> User:
    """
    Check credentials and stamp ``last_login``.

    The email lookup is case-insensitive through normalization.

    Raises:
        InvalidCredentialsError: If no account matches the pair
        InactiveAccountError: If the account is deactivated
    """
    user = (
        User.objects
        .select_for_update()
        .filter(email=normalize_member_email(email))
        .first()
    )
    if user is None or not user.check_password(password):
        logger.info("Failed login for %s", normalize_member_email(email))
        raise InvalidCredentialsError(_BAD_CREDENTIALS)

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])
    return user
