# ==========================================
# apps/expenses/models.py
# ==========================================

from decimal import Decimal
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.db.models import Q
import uuid

from apps.accounts.models import normalize_member_email


class Frequency(models.TextChoices):
    MONTHLY = 'monthly', 'Monthly'
    QUARTERLY = 'quarterly', 'Quarterly'
    YEARLY = 'yearly', 'Yearly'
    ONE_TIME = 'one-time', 'One-time'


class SharedExpense(models.Model):
    """A household cost divided among members. Immutable once created."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    property = models.ForeignKey('properties.Property', on_delete=models.CASCADE, related_name='shared_expenses')
    name = models.CharField(max_length=200)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    frequency = models.CharField(max_length=16, choices=Frequency.choices, default=Frequency.MONTHLY)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='shared_expenses'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'shared_expenses'
        indexes = [
            models.Index(fields=['property', 'created_at'], name='shared_expenses_prop_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} ({self.amount}, {self.frequency})"


class MemberTag(models.Model):
    """
    Allocation category: holders split ``share_percentage`` of the pool
    evenly and each pay ``fixed_fee`` on top.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    property = models.ForeignKey('properties.Property', on_delete=models.CASCADE, related_name='member_tags')
    name = models.CharField(max_length=100)
    share_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )
    fixed_fee = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    color = models.CharField(max_length=20, default='blue', blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'member_tags'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.share_percentage}%)"


class MemberShare(models.Model):
    """
    A member's allocation override within a property.

    ``tag_id`` is a plain column, not a foreign key: deleting a tag
    leaves its shares in place and the allocation treats them as 0.
    At most one row exists per (property, member_email, tag_id), with
    a NULL tag_id counting as its own value.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    property = models.ForeignKey('properties.Property', on_delete=models.CASCADE, related_name='member_shares')
    member_email = models.EmailField(max_length=255)
    tag_id = models.UUIDField(null=True, blank=True)
    share_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0')), MaxValueValidator(Decimal('100'))]
    )
    custom_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'member_shares'
        constraints = [
            models.UniqueConstraint(
                fields=['property', 'member_email', 'tag_id'],
                name='member_shares_unique_tagged',
            ),
            models.UniqueConstraint(
                fields=['property', 'member_email'],
                condition=Q(tag_id__isnull=True),
                name='member_shares_unique_untagged',
            ),
        ]
        indexes = [
            models.Index(fields=['property', 'member_email'], name='member_shares_email_idx'),
        ]
        ordering = ['member_email', 'created_at']

    def __str__(self):
        return f"{self.member_email} in {self.property_id}"

    def save(self, *args, **kwargs):
        self.member_email = normalize_member_email(self.member_email)
        super().save(*args, **kwargs)
