"""Account registration."""

import logging

from django.db import transaction, IntegrityError

from apps.accounts.models import User, normalize_member_email
from apps.properties.models import PropertyMember

from .exceptions import EmailAlreadyRegisteredError

logger = logging.getLogger(__name__)


def register_user(*, email: str, password: str, display_name: str = "") -> User:
    """
    Create an account.

    The email is normalized the way rosters store it, so properties that
    listed the address before registration become visible right away.

    Raises:
        EmailAlreadyRegisteredError: If the email is taken
    """
    email = normalize_member_email(email)

    if User.objects.filter(email=email).exists():
        raise EmailAlreadyRegisteredError(f"An account with email {email} already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(email=email, password=password, display_name=display_name)
    except IntegrityError:
        raise EmailAlreadyRegisteredError(f"An account with email {email} already exists")

    rosters = PropertyMember.objects.filter(email=email).count()
    logger.info("Registered user %s (on %d property rosters)", user.id, rosters)
    return user
