from django.db import models
import uuid


class NotificationType(models.TextChoices):
    BOOKING_REQUEST = 'booking_request', 'Booking request'
    BOOKING_APPROVED = 'booking_approved', 'Booking approved'
    BOOKING_REJECTED = 'booking_rejected', 'Booking rejected'
    EXPENSE_CREATED = 'expense_created', 'Expense created'
    MEMBER_ADDED = 'member_added', 'Member added'


class Notification(models.Model):
    """In-app notification for a single user."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='notifications')
    type = models.CharField(max_length=32, choices=NotificationType.choices)
    data = models.JSONField(default=dict, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        indexes = [
            models.Index(fields=['user', 'is_read'], name='notifications_user_read_idx'),
            models.Index(fields=['user', 'created_at'], name='notifications_user_ts_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.get_type_display()} for {self.user}"
