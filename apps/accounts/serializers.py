from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from .models import User, normalize_member_email


class UserSerializer(serializers.ModelSerializer):
    """Profile of an account."""

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name', 'created_at', 'last_login']
        read_only_fields = fields


class UserMinimalSerializer(serializers.ModelSerializer):
    """Name tag used inside bookings and property payloads."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class HouseSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    is_owner = serializers.BooleanField()
    is_admin = serializers.BooleanField()


class CurrentUserSerializer(serializers.Serializer):
    user = UserSerializer()
    houses = HouseSummarySerializer(many=True)


class ProfileUpdateSerializer(serializers.Serializer):
    display_name = serializers.CharField(max_length=150, allow_blank=True)


class RegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(write_only=True, style={'input_type': 'password'})
    display_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')

    def validate_email(self, value):
        return normalize_member_email(value)

    def validate(self, attrs):
        if attrs['password'] != attrs.pop('password_confirm'):
            raise serializers.ValidationError({'password_confirm': 'Passwords do not match'})
        return attrs


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})


# =============================================================================
# Response serializers (API docs)
# =============================================================================

class TokensSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    tokens = TokensSerializer()


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
