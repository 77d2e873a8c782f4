from rest_framework import permissions

from .models import Property


def _property_from_view(view):
    property_id = view.kwargs.get('property_id')
    if property_id is None:
        return None
    return Property.objects.filter(id=property_id).first()


class IsPropertyAdmin(permissions.BasePermission):
    """
    Permission: User must be a property admin.

    Works on Property objects, and on nested routes that carry a
    ``property_id`` URL kwarg.
    """

    def has_permission(self, request, view):
        if 'property_id' not in view.kwargs:
            return True
        property_obj = _property_from_view(view)
        # Missing property is reported as 404 by the view
        return property_obj is None or property_obj.is_admin(request.user)

    def has_object_permission(self, request, view, obj):
        # obj is a Property instance
        return obj.is_admin(request.user)


class IsPropertyMember(permissions.BasePermission):
    """
    Permission: User must be an admin or on the property roster.
    """

    def has_permission(self, request, view):
        if 'property_id' not in view.kwargs:
            return True
        property_obj = _property_from_view(view)
        return property_obj is None or property_obj.has_member(request.user)

    def has_object_permission(self, request, view, obj):
        # obj is a Property instance
        return obj.has_member(request.user)
