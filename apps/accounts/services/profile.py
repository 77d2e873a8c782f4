"""Current-user profile and the houses it can see."""

from typing import List

from django.db import transaction

from apps.accounts.models import User
from apps.properties.services import get_user_properties


def get_user_houses(*, user: User) -> List[dict]:
    """
    Properties visible to the user, by name, with the user's role in each.

    Visibility follows the roster rule: administered properties plus
    those whose roster holds the user's email.
    """
    admin_ids = set(user.administered_properties.values_list('id', flat=True))
    return [
        {
            'id': house.id,
            'name': house.name,
            'is_owner': house.owner_id == user.id,
            'is_admin': house.id in admin_ids,
        }
        for house in get_user_properties(user=user).order_by('name')
    ]


@transaction.atomic
def update_profile(*, user: User, display_name: str) -> User:
    user.display_name = display_name.strip()
    user.save(update_fields=['display_name'])
    return user
