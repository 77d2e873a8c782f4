from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.bookings.serializers import HouseStatusSerializer
from .aggregator import DashboardQueries
from .exceptions import InvalidPeriodError, PropertyNotFoundError, InsufficientPermissionsError
from .serializers import MonthlyQuerySerializer, MonthlySummarySerializer, ErrorSerializer


@extend_schema(
    parameters=[
        OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM), defaults to the current month'),
    ],
    responses={
        200: MonthlySummarySerializer,
        400: ErrorSerializer,
    },
    description="What the current user owes this month, per property: shared expenses plus confirmed stays.",
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def monthly_summary(request):
    """Monthly amounts of the current user - thin HTTP handler."""
    query_serializer = MonthlyQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    try:
        summary = DashboardQueries.monthly_summary(
            request.user,
            period=query_serializer.validated_data.get('period')
        )
    except InvalidPeriodError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(MonthlySummarySerializer(summary).data)


@extend_schema(
    responses={
        200: HouseStatusSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Who is staying at the property today and the next confirmed stays.",
    tags=['dashboard'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def house_status(request, property_id):
    """House status widget - thin HTTP handler."""
    try:
        result = DashboardQueries.house_status(property_id, request.user)
    except PropertyNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(HouseStatusSerializer(result).data)
