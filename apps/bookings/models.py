# ==========================================
# apps/bookings/models.py
# ==========================================

from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class BookingStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    CONFIRMED = 'confirmed', 'Confirmed'
    REJECTED = 'rejected', 'Rejected'


class Booking(models.Model):
    """
    A request to occupy a property for ``[start_date, end_date)``.

    Created pending; an admin confirms or rejects it. Editing sends it
    back to pending.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    property = models.ForeignKey('properties.Property', on_delete=models.CASCADE, related_name='bookings')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='bookings')
    user_name = models.CharField(max_length=150, blank=True)

    start_date = models.DateField()
    end_date = models.DateField()
    adults = models.PositiveSmallIntegerField(default=1, validators=[MinValueValidator(1)])
    children = models.PositiveSmallIntegerField(default=0)
    selected_optional_fees = models.JSONField(default=list, blank=True)
    total_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    status = models.CharField(max_length=16, choices=BookingStatus.choices, default=BookingStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bookings'
        indexes = [
            models.Index(fields=['property', 'start_date'], name='bookings_property_start_idx'),
            models.Index(fields=['user', 'status'], name='bookings_user_status_idx'),
        ]
        ordering = ['start_date', 'created_at']

    def __str__(self):
        return f"{self.user_name or self.user_id}: {self.start_date} - {self.end_date} ({self.status})"

    def get_nights(self):
        return (self.end_date - self.start_date).days
