"""Property lookups shared by the expenses services."""

from uuid import UUID

from apps.accounts.models import User
from apps.properties.models import Property

from .exceptions import PropertyNotFoundError, InsufficientPermissionsError


def get_property(property_id: UUID, *, lock: bool = False) -> Property:
    """
    Fetch a property, optionally with a row lock (inside a transaction).

    Raises:
        PropertyNotFoundError: If property doesn't exist
    """
    queryset = Property.objects.all()
    if lock:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(id=property_id)
    except Property.DoesNotExist:
        raise PropertyNotFoundError(f"Property with ID {property_id} not found")


def require_admin(property_obj: Property, user: User, action: str) -> None:
    if not property_obj.is_admin(user):
        raise InsufficientPermissionsError(f"Only property admins can {action}")


def require_member(property_obj: Property, user: User) -> None:
    if not property_obj.has_member(user):
        raise InsufficientPermissionsError("You are not a member of this property")
