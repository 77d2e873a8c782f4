from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import NotificationSerializer, NotificationQuerySerializer
from apps.notifications.services import (
    get_user_notifications,
    mark_as_read,
    mark_all_as_read,
    NotificationNotFoundError,
)


class NotificationPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema(
    parameters=[
        OpenApiParameter('unread', OpenApiTypes.BOOL, description='Only unread notifications'),
    ],
    responses={200: NotificationSerializer(many=True)},
    description="Current user's notifications, newest first.",
    tags=['notifications'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notification_list(request):
    """List own notifications - thin HTTP handler."""
    query_serializer = NotificationQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    notifications = get_user_notifications(
        user=request.user,
        unread_only=query_serializer.validated_data['unread']
    )

    paginator = NotificationPagination()
    page = paginator.paginate_queryset(notifications, request)
    serializer = NotificationSerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    request=None,
    responses={200: NotificationSerializer},
    description="Mark one notification as read.",
    tags=['notifications'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def notification_read(request, notification_id):
    """Mark one notification read - thin HTTP handler."""
    try:
        notification = mark_as_read(notification_id=notification_id, user=request.user)
    except NotificationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(NotificationSerializer(notification).data)


@extend_schema(
    request=None,
    description="Mark every unread notification as read.",
    tags=['notifications'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def notification_read_all(request):
    """Mark all notifications read - thin HTTP handler."""
    updated = mark_all_as_read(user=request.user)
    return Response({'updated': updated})
