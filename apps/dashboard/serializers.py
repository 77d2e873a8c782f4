"""
Serializers for dashboard app.

Input Serializers:
    MonthlyQuerySerializer - Validates the period parameter

Response Serializers:
    MonthlySummarySerializer - Per-property monthly amounts and grand total
"""

from rest_framework import serializers

from apps.expenses.allocation import Month


class MonthlyQuerySerializer(serializers.Serializer):
    """
    Validate the monthly summary query parameters.

    Query Parameters:
        period (str): Month period in YYYY-MM format (e.g., '2025-01').
            Defaults to the current month.
    """

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )

    def validate_period(self, value):
        if value:
            try:
                Month.parse(value)
            except ValueError:
                raise serializers.ValidationError('Invalid period. Use YYYY-MM')
        return value


class MonthlyItemSerializer(serializers.Serializer):
    property_id = serializers.UUIDField()
    property_name = serializers.CharField()
    shared_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    booking_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    total = serializers.DecimalField(max_digits=14, decimal_places=2)


class MonthlySummarySerializer(serializers.Serializer):
    period = serializers.CharField()
    items = MonthlyItemSerializer(many=True)
    grand_total = serializers.DecimalField(max_digits=14, decimal_places=2)


class ErrorSerializer(serializers.Serializer):
    error = serializers.CharField()
