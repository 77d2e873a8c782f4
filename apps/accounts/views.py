from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema

from .serializers import (
    RegistrationSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
    CurrentUserSerializer,
    AuthResponseSerializer,
    ErrorSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    get_user_houses,
    update_profile,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InactiveAccountError,
)


def _auth_payload(user):
    refresh = RefreshToken.for_user(user)
    return {
        'user': UserSerializer(user).data,
        'tokens': {
            'refresh': str(refresh),
            'access': str(refresh.access_token),
        },
    }


@extend_schema(
    request=RegistrationSerializer,
    responses={201: AuthResponseSerializer, 400: ErrorSerializer},
    description="Create an account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register - thin HTTP handler."""
    serializer = RegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = register_user(**serializer.validated_data)
    except EmailAlreadyRegisteredError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(_auth_payload(user), status=status.HTTP_201_CREATED)


@extend_schema(
    request=LoginSerializer,
    responses={
        200: AuthResponseSerializer,
        401: ErrorSerializer,
        403: ErrorSerializer,
    },
    description="Exchange email and password for JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login - thin HTTP handler."""
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(_auth_payload(user))


@extend_schema(
    request=ProfileUpdateSerializer,
    responses={200: CurrentUserSerializer},
    description="The current user's profile and the houses they can see. PATCH renames the user.",
    tags=['auth'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def current_user(request):
    """Current user - thin HTTP handler."""
    user = request.user

    if request.method == 'PATCH':
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = update_profile(user=user, display_name=serializer.validated_data['display_name'])

    return Response(CurrentUserSerializer({
        'user': user,
        'houses': get_user_houses(user=user),
    }).data)
