from rest_framework import mixins, viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from .permissions import IsPropertyAdmin, IsPropertyMember
from .serializers import (
    PropertySerializer,
    PropertyListSerializer,
    PropertyCreateSerializer,
    AddMemberSerializer,
    SetMembersSerializer,
    SetAdminsSerializer,
    PropertySettingsSerializer,
)
from apps.accounts.serializers import UserMinimalSerializer

from apps.properties.services import (
    create_property,
    update_property,
    get_user_properties,
    check_property_admin,
    get_allowed_emails,
    add_allowed_email,
    remove_allowed_email,
    update_allowed_emails,
    update_property_admins,
    get_property_settings,
    update_property_settings,
    # Exceptions
    InsufficientPermissionsError,
    DuplicateMemberError,
    NotMemberError,
    InvalidEmailError,
    CannotRemoveOwnerError,
)


class PropertyPagination(PageNumberPagination):
    """Custom pagination for properties."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PropertyViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for properties.

    All business logic is handled by services.
    Properties are never deleted, so there is no destroy route.

    list: Properties the user administers or is on the roster of
    create: Create a property (creator becomes owner and admin)
    retrieve: Get a property
    update: Rename a property (admin only)
    partial_update: Rename a property (admin only)
    """

    serializer_class = PropertySerializer
    permission_classes = [IsAuthenticated]
    pagination_class = PropertyPagination

    def get_queryset(self):
        """Return only properties visible to the user."""
        return get_user_properties(user=self.request.user).prefetch_related('admins', 'members')

    def get_serializer_class(self):
        if self.action == 'list':
            return PropertyListSerializer
        elif self.action in ['create', 'update', 'partial_update']:
            return PropertyCreateSerializer
        return PropertySerializer

    def get_permissions(self):
        if self.action in ['update', 'partial_update']:
            return [IsAuthenticated(), IsPropertyAdmin()]
        return [IsAuthenticated(), IsPropertyMember()]

    def create(self, request, *args, **kwargs):
        """Create a new property."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        property_obj = create_property(
            name=serializer.validated_data['name'],
            owner=request.user,
        )

        output_serializer = PropertySerializer(property_obj, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Rename a property."""
        property_obj = self.get_object()
        serializer = PropertyCreateSerializer(data=request.data, partial=kwargs.get('partial', False))
        serializer.is_valid(raise_exception=True)

        try:
            property_obj = update_property(
                property_id=property_obj.id,
                user=request.user,
                name=serializer.validated_data.get('name'),
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        output_serializer = PropertySerializer(property_obj, context={'request': request})
        return Response(output_serializer.data)

    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """Get the property roster."""
        property_obj = self.get_object()
        return Response({'emails': get_allowed_emails(property_id=property_obj.id)})

    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, IsPropertyAdmin])
    def add_member(self, request, pk=None):
        """Add an email to the roster (admin only)."""
        property_obj = self.get_object()
        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            add_allowed_email(
                property_id=property_obj.id,
                email=serializer.validated_data['email'],
                added_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (DuplicateMemberError, InvalidEmailError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {'emails': get_allowed_emails(property_id=property_obj.id)},
            status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['delete'], permission_classes=[IsAuthenticated, IsPropertyAdmin])
    def remove_member(self, request, pk=None):
        """Remove an email from the roster (admin only)."""
        property_obj = self.get_object()
        email = request.data.get('email')

        if not email:
            return Response(
                {'error': 'email is required'},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            remove_allowed_email(property_id=property_obj.id, email=email, removed_by=request.user)
            return Response(status=status.HTTP_204_NO_CONTENT)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (CannotRemoveOwnerError, NotMemberError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    @action(detail=True, methods=['put'], permission_classes=[IsAuthenticated, IsPropertyAdmin])
    def set_members(self, request, pk=None):
        """Replace the roster (admin only). The owner is always kept."""
        property_obj = self.get_object()
        serializer = SetMembersSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            emails = update_allowed_emails(
                property_id=property_obj.id,
                emails=serializer.validated_data['emails'],
                updated_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidEmailError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'emails': emails})

    @action(detail=True, methods=['get', 'put'], permission_classes=[IsAuthenticated, IsPropertyMember])
    def admins(self, request, pk=None):
        """List admins, or replace them (admin only). The owner is always kept."""
        property_obj = self.get_object()

        if request.method == 'GET':
            serializer = UserMinimalSerializer(property_obj.admins.all(), many=True)
            return Response(serializer.data)

        serializer = SetAdminsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            admins = update_property_admins(
                property_id=property_obj.id,
                admin_ids=serializer.validated_data['admin_ids'],
                updated_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(UserMinimalSerializer(admins, many=True).data)

    @action(
        detail=True,
        methods=['get', 'put'],
        url_path='settings',
        url_name='settings',
        permission_classes=[IsAuthenticated, IsPropertyMember],
    )
    def property_settings(self, request, pk=None):
        """Get the settings document, or replace it (admin only)."""
        property_obj = self.get_object()

        if request.method == 'GET':
            try:
                return Response(get_property_settings(property_id=property_obj.id, user=request.user))
            except NotMemberError as e:
                return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        serializer = PropertySettingsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            settings_doc = update_property_settings(
                property_id=property_obj.id,
                settings=serializer.validated_data,
                updated_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(settings_doc)


@extend_schema(
    description="Whether the current user administers the property.",
    tags=['properties'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def is_admin(request, property_id):
    """Admin check used by clients to show admin-only controls."""
    return Response({'is_admin': check_property_admin(property_id=property_id, user=request.user)})
