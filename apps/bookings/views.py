from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    BookingSerializer,
    BookingWriteSerializer,
    BookingRequestSerializer,
    BookingStatusSerializer,
    BookingListQuerySerializer,
    BlockedCalendarSerializer,
    QuoteSerializer,
    ErrorSerializer,
)
from apps.bookings.services import (
    create_booking,
    update_booking,
    update_booking_status,
    delete_booking,
    get_booking,
    get_bookings,
    get_user_bookings,
    get_blocked_calendar,
    get_booking_quote,
    # Exceptions
    BookingNotFoundError,
    PropertyNotFoundError,
    InsufficientPermissionsError,
    InvalidBookingRangeError,
    InvalidGuestCountError,
    InvalidTotalCostError,
    BookingConflictError,
    InvalidStatusTransitionError,
)


@extend_schema(
    request=BookingWriteSerializer,
    responses={
        200: BookingSerializer(many=True),
        201: BookingSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
        409: ErrorSerializer,
    },
    description="List a property's bookings, or request a new stay.",
    tags=['bookings'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def property_bookings(request, property_id):
    """List or create bookings for a property - thin HTTP handler."""
    if request.method == 'GET':
        query_serializer = BookingListQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        try:
            bookings = get_bookings(
                property_id=property_id,
                user=request.user,
                status=query_serializer.validated_data.get('status')
            )
        except PropertyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

        return Response(BookingSerializer(bookings, many=True).data)

    serializer = BookingWriteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        booking = create_booking(
            property_id=property_id,
            user=request.user,
            start_date=data['start_date'],
            end_date=data['end_date'],
            adults=data['adults'],
            children=data['children'],
            selected_optional_fees=data['selected_optional_fees'],
            total_cost=data.get('total_cost'),
        )
    except PropertyNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except BookingConflictError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except (InvalidBookingRangeError, InvalidGuestCountError, InvalidTotalCostError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=BookingWriteSerializer,
    responses={
        200: BookingSerializer,
        204: None,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
        409: ErrorSerializer,
    },
    description="Get, edit (back to pending) or delete a booking.",
    tags=['bookings'],
)
@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated])
def booking_detail(request, booking_id):
    """Retrieve, edit or delete one booking - thin HTTP handler."""
    try:
        if request.method == 'GET':
            booking = get_booking(booking_id=booking_id, user=request.user)
            return Response(BookingSerializer(booking).data)

        if request.method == 'DELETE':
            delete_booking(booking_id=booking_id, user=request.user)
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = BookingWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = update_booking(
            booking_id=booking_id,
            user=request.user,
            start_date=data['start_date'],
            end_date=data['end_date'],
            adults=data['adults'],
            children=data['children'],
            selected_optional_fees=data['selected_optional_fees'],
            total_cost=data.get('total_cost'),
        )
        return Response(BookingSerializer(booking).data)

    except BookingNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except BookingConflictError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except (InvalidBookingRangeError, InvalidGuestCountError, InvalidTotalCostError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    request=BookingStatusSerializer,
    responses={
        200: BookingSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
        409: ErrorSerializer,
    },
    description="Confirm or reject a booking (property admins only).",
    tags=['bookings'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def booking_status(request, booking_id):
    """Admin decision on a booking - thin HTTP handler."""
    serializer = BookingStatusSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        booking = update_booking_status(
            booking_id=booking_id,
            new_status=serializer.validated_data['status'],
            user=request.user,
        )
    except BookingNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except BookingConflictError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except InvalidStatusTransitionError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(BookingSerializer(booking).data)


@extend_schema(
    responses={
        200: BlockedCalendarSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Dates the booking calendar must disable: everything before today plus pending and confirmed stays.",
    tags=['bookings'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def blocked_calendar(request, property_id):
    """Blocked date ranges of a property - thin HTTP handler."""
    try:
        calendar = get_blocked_calendar(property_id=property_id, user=request.user)
    except PropertyNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(BlockedCalendarSerializer(calendar).data)


@extend_schema(
    request=BookingRequestSerializer,
    responses={
        200: QuoteSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Price a prospective stay with the property's current settings.",
    tags=['bookings'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def booking_quote(request, property_id):
    """Quote a stay - thin HTTP handler."""
    serializer = BookingRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        quote = get_booking_quote(
            property_id=property_id,
            user=request.user,
            start_date=data['start_date'],
            end_date=data['end_date'],
            adults=data['adults'],
            children=data['children'],
            selected_optional_fees=data['selected_optional_fees'],
        )
    except PropertyNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except InvalidBookingRangeError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(QuoteSerializer(quote).data)


@extend_schema(
    responses={200: BookingSerializer(many=True)},
    description="Every booking the current user made, newest first.",
    tags=['bookings'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_bookings(request):
    """Current user's bookings - thin HTTP handler."""
    return Response(BookingSerializer(get_user_bookings(user=request.user), many=True).data)
