from rest_framework import serializers

from apps.accounts.serializers import UserMinimalSerializer
from .models import Booking, BookingStatus


class BookingSerializer(serializers.ModelSerializer):
    """Main serializer for bookings."""

    user = UserMinimalSerializer(read_only=True)
    nights = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            'id',
            'property',
            'user',
            'user_name',
            'start_date',
            'end_date',
            'nights',
            'adults',
            'children',
            'selected_optional_fees',
            'total_cost',
            'status',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_nights(self, obj):
        return obj.get_nights()


class BookingRequestSerializer(serializers.Serializer):
    """Dates and guests of a requested stay."""

    start_date = serializers.DateField(required=True)
    end_date = serializers.DateField(required=True)
    adults = serializers.IntegerField(min_value=1, default=1)
    children = serializers.IntegerField(min_value=0, default=0)
    selected_optional_fees = serializers.ListField(
        child=serializers.CharField(max_length=64),
        required=False,
        default=list
    )

    def validate(self, attrs):
        if attrs['start_date'] >= attrs['end_date']:
            raise serializers.ValidationError({'end_date': 'End date must be after start date.'})
        return attrs


class BookingWriteSerializer(BookingRequestSerializer):
    """Create/edit payload. ``total_cost`` is quoted when omitted."""

    total_cost = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True
    )


class BookingStatusSerializer(serializers.Serializer):
    """Admin decision on a booking."""

    status = serializers.ChoiceField(
        choices=[BookingStatus.CONFIRMED, BookingStatus.REJECTED],
        required=True
    )


class BookingListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=BookingStatus.choices, required=False)


# =============================================================================
# Response serializers
# =============================================================================

class DateRangeSerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()


class BlockedCalendarSerializer(serializers.Serializer):
    before = serializers.DateField(allow_null=True)
    ranges = DateRangeSerializer(many=True)


class QuoteItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    value = serializers.DecimalField(max_digits=12, decimal_places=2)
    is_optional = serializers.BooleanField()


class QuoteSerializer(serializers.Serializer):
    nights = serializers.IntegerField()
    lodging = serializers.DecimalField(max_digits=12, decimal_places=2)
    fixed_costs = serializers.DecimalField(max_digits=12, decimal_places=2)
    optional_fees = serializers.DecimalField(max_digits=12, decimal_places=2)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField()
    items = QuoteItemSerializer(many=True)


class HouseStatusSerializer(serializers.Serializer):
    current = BookingSerializer(allow_null=True)
    upcoming = BookingSerializer(many=True)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
