from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .serializers import (
    SharedExpenseSerializer,
    SharedExpenseCreateSerializer,
    MemberTagSerializer,
    MemberTagCreateSerializer,
    MemberShareSerializer,
    MemberShareWriteSerializer,
    MonthQuerySerializer,
    AllocationSerializer,
    ErrorSerializer,
)
from apps.expenses.services import (
    create_shared_expense,
    get_shared_expenses,
    delete_shared_expense,
    create_member_tag,
    get_member_tags,
    delete_member_tag,
    create_member_share,
    update_member_share,
    delete_member_share,
    get_member_shares,
    get_property_allocation,
    # Exceptions
    PropertyNotFoundError,
    InsufficientPermissionsError,
    ExpenseNotFoundError,
    TagNotFoundError,
    ShareNotFoundError,
    InvalidShareError,
    DuplicateShareError,
)


@extend_schema(
    request=SharedExpenseCreateSerializer,
    responses={
        200: SharedExpenseSerializer(many=True),
        201: SharedExpenseSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="List a property's shared expenses, or add one (admins only).",
    tags=['expenses'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def property_expenses(request, property_id):
    """List or create shared expenses - thin HTTP handler."""
    try:
        if request.method == 'GET':
            expenses = get_shared_expenses(property_id=property_id, user=request.user)
            return Response(SharedExpenseSerializer(expenses, many=True).data)

        serializer = SharedExpenseCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        expense = create_shared_expense(
            property_id=property_id,
            user=request.user,
            **serializer.validated_data
        )
        return Response(SharedExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)

    except PropertyNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except InvalidShareError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    responses={204: None, 403: ErrorSerializer, 404: ErrorSerializer},
    description="Delete a shared expense (admins only).",
    tags=['expenses'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def expense_detail(request, expense_id):
    try:
        delete_shared_expense(expense_id=expense_id, user=request.user)
    except ExpenseNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    request=MemberTagCreateSerializer,
    responses={
        200: MemberTagSerializer(many=True),
        201: MemberTagSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="List a property's member tags, or create one (admins only).",
    tags=['expenses'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def property_tags(request, property_id):
    """List or create member tags - thin HTTP handler."""
    try:
        if request.method == 'GET':
            tags = get_member_tags(property_id=property_id, user=request.user)
            return Response(MemberTagSerializer(tags, many=True).data)

        serializer = MemberTagCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tag = create_member_tag(
            property_id=property_id,
            user=request.user,
            **serializer.validated_data
        )
        return Response(MemberTagSerializer(tag).data, status=status.HTTP_201_CREATED)

    except PropertyNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except InvalidShareError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    responses={204: None, 403: ErrorSerializer, 404: ErrorSerializer},
    description="Delete a member tag (admins only). Shares that use it are kept and count as 0.",
    tags=['expenses'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def tag_detail(request, tag_id):
    try:
        delete_member_tag(tag_id=tag_id, user=request.user)
    except TagNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(
    request=MemberShareWriteSerializer,
    responses={
        200: MemberShareSerializer,
        201: MemberShareSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description=(
        "List a property's member shares, or upsert one (admins only). "
        "Posting a share for an existing member and tag updates it and returns 200."
    ),
    tags=['expenses'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def property_shares(request, property_id):
    """List or upsert member shares - thin HTTP handler."""
    try:
        if request.method == 'GET':
            shares = get_member_shares(property_id=property_id, user=request.user)
            return Response(MemberShareSerializer(shares, many=True).data)

        serializer = MemberShareWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        share, created = create_member_share(
            property_id=property_id,
            user=request.user,
            **serializer.validated_data
        )
        return Response(
            MemberShareSerializer(share).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )

    except (PropertyNotFoundError, TagNotFoundError) as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except InvalidShareError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    request=MemberShareWriteSerializer,
    responses={
        200: MemberShareSerializer,
        204: None,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
        409: ErrorSerializer,
    },
    description="Partially update or delete a member share (admins only).",
    tags=['expenses'],
)
@api_view(['PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def share_detail(request, share_id):
    """Edit or delete one share - thin HTTP handler."""
    try:
        if request.method == 'DELETE':
            delete_member_share(share_id=share_id, user=request.user)
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = MemberShareWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        share = update_member_share(
            share_id=share_id,
            user=request.user,
            **serializer.validated_data
        )
        return Response(MemberShareSerializer(share).data)

    except (ShareNotFoundError, TagNotFoundError) as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except DuplicateShareError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except InvalidShareError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    parameters=[
        OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM), defaults to the current month'),
    ],
    responses={
        200: AllocationSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="What every roster member owes for the month's shared expenses.",
    tags=['expenses'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def property_allocation(request, property_id):
    """Monthly allocation of a property - thin HTTP handler."""
    query_serializer = MonthQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    try:
        result = get_property_allocation(
            property_id=property_id,
            user=request.user,
            month=query_serializer.validated_data['month']
        )
    except PropertyNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except InsufficientPermissionsError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(AllocationSerializer(result).data)
