from rest_framework import serializers

from apps.accounts.models import normalize_member_email
from apps.accounts.serializers import UserMinimalSerializer
from .models import Property, PropertyMember


class PropertySerializer(serializers.ModelSerializer):
    """Main serializer for properties."""

    owner = UserMinimalSerializer(read_only=True)
    admins = UserMinimalSerializer(many=True, read_only=True)
    allowed_emails = serializers.SerializerMethodField()
    settings = serializers.SerializerMethodField()
    is_admin = serializers.SerializerMethodField()

    class Meta:
        model = Property
        fields = [
            'id',
            'name',
            'owner',
            'admins',
            'allowed_emails',
            'settings',
            'is_admin',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_allowed_emails(self, obj):
        return obj.get_allowed_emails()

    def get_settings(self, obj):
        return obj.get_settings()

    def get_is_admin(self, obj):
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            return obj.is_admin(request.user)
        return False


class PropertyListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for list views."""

    owner = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()

    class Meta:
        model = Property
        fields = ['id', 'name', 'owner', 'member_count', 'created_at']
        read_only_fields = fields

    def get_member_count(self, obj):
        return obj.members.count()


class PropertyCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating and renaming properties."""

    class Meta:
        model = Property
        fields = ['name']


class PropertyMemberSerializer(serializers.ModelSerializer):
    """One roster entry."""

    class Meta:
        model = PropertyMember
        fields = ['id', 'email', 'added_at']
        read_only_fields = fields


class AddMemberSerializer(serializers.Serializer):
    """Serializer for adding an email to the roster."""

    email = serializers.EmailField(required=True)


class SetMembersSerializer(serializers.Serializer):
    """Serializer for replacing the whole roster."""

    emails = serializers.ListField(child=serializers.EmailField(), allow_empty=True)

    def validate_emails(self, value):
        seen = set()
        for email in value:
            normalized = normalize_member_email(email)
            if normalized in seen:
                raise serializers.ValidationError(f"Duplicate email: {normalized}")
            seen.add(normalized)
        return value


class SetAdminsSerializer(serializers.Serializer):
    """Serializer for replacing the admin set."""

    admin_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)


class FixedCostSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64, required=False, allow_blank=True)
    name = serializers.CharField(max_length=200)
    value = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    is_optional = serializers.BooleanField(default=False)


class PricesSerializer(serializers.Serializer):
    adult_per_day = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    child_per_day = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    currency = serializers.CharField(max_length=8, required=False)


class LimitsSerializer(serializers.Serializer):
    child_max_age = serializers.IntegerField(min_value=0, required=False)
    min_days_to_book = serializers.IntegerField(min_value=1, required=False)


class BankDetailsSerializer(serializers.Serializer):
    account_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    rut = serializers.CharField(max_length=32, required=False, allow_blank=True)
    bank_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    account_type = serializers.CharField(max_length=64, required=False, allow_blank=True)
    account_number = serializers.CharField(max_length=64, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)


class PropertySettingsSerializer(serializers.Serializer):
    """
    Validates a settings update. Every section is optional; whatever is
    left out is filled in by ``normalize_settings``.
    """

    prices = PricesSerializer(required=False)
    limits = LimitsSerializer(required=False)
    fixed_costs = FixedCostSerializer(many=True, required=False)
    bank_details = BankDetailsSerializer(required=False)
