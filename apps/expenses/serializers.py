"""
Serializers for expenses app.

Input serializers validate request bodies and query parameters; the
response serializers render model instances and ``AllocationResult``.
"""

from decimal import Decimal

from rest_framework import serializers

from .allocation import Month
from .models import Frequency, MemberShare, MemberTag, SharedExpense


class SharedExpenseSerializer(serializers.ModelSerializer):
    created_by_email = serializers.EmailField(source='created_by.email', read_only=True, default=None)

    class Meta:
        model = SharedExpense
        fields = ['id', 'property', 'name', 'amount', 'frequency', 'created_by_email', 'created_at']
        read_only_fields = fields


class SharedExpenseCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0'))
    frequency = serializers.ChoiceField(choices=Frequency.choices, default=Frequency.MONTHLY)


class MemberTagSerializer(serializers.ModelSerializer):
    class Meta:
        model = MemberTag
        fields = ['id', 'property', 'name', 'share_percentage', 'fixed_fee', 'color', 'created_at']
        read_only_fields = fields


class MemberTagCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    share_percentage = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100')
    )
    fixed_fee = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        default=Decimal('0')
    )
    color = serializers.CharField(max_length=20, required=False, default='blue')


class MemberShareSerializer(serializers.ModelSerializer):
    class Meta:
        model = MemberShare
        fields = [
            'id',
            'property',
            'member_email',
            'tag_id',
            'share_percentage',
            'custom_amount',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class MemberShareWriteSerializer(serializers.Serializer):
    """
    Share payload. Used with ``partial=True`` for edits, where only the
    keys present in the body are changed.
    """

    member_email = serializers.EmailField(max_length=255)
    tag_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    share_percentage = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
        required=False,
        allow_null=True,
        default=None
    )
    custom_amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal('0'),
        required=False,
        allow_null=True,
        default=None
    )

    def validate_member_email(self, value):
        return value.strip().lower()


class MonthQuerySerializer(serializers.Serializer):
    """
    Validate the ``period`` query parameter (YYYY-MM).

    ``validated_data['month']`` holds the parsed Month, or None when no
    period was given.
    """

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )

    def validate(self, attrs):
        period = attrs.get('period')
        try:
            attrs['month'] = Month.parse(period) if period else None
        except ValueError:
            raise serializers.ValidationError({
                'period': 'Invalid period. Use YYYY-MM'
            })
        return attrs


class AllocationSerializer(serializers.Serializer):
    month = serializers.CharField(allow_null=True)
    total_pool = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_assigned = serializers.DecimalField(max_digits=14, decimal_places=2)
    payments = serializers.DictField(child=serializers.DecimalField(max_digits=14, decimal_places=2))
    unassigned = serializers.ListField(child=serializers.EmailField())


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
