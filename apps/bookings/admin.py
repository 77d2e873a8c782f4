from django.contrib import admin
from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """Admin interface for bookings."""

    list_display = ['property', 'user_name', 'start_date', 'end_date', 'status', 'total_cost']
    list_filter = ['status', 'start_date']
    search_fields = ['user_name', 'user__email', 'property__name']
    readonly_fields = ['id', 'created_at', 'updated_at']
    date_hierarchy = 'start_date'
