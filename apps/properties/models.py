# ==========================================
# apps/properties/models.py
# ==========================================

from django.db import models
import uuid

from apps.accounts.models import normalize_member_email
from .settings_schema import default_property_settings, normalize_settings


class Property(models.Model):
    """Shared vacation home coordinated by its members."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    owner = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='owned_properties')
    admins = models.ManyToManyField('accounts.User', related_name='administered_properties', blank=True)
    settings = models.JSONField(default=default_property_settings, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'properties'
        verbose_name_plural = 'properties'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='properties_owner_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def is_admin(self, user):
        if user is None or not getattr(user, 'is_authenticated', False):
            return False
        return self.admins.filter(id=user.id).exists()

    def has_member(self, user):
        """Admins (by id) and roster members (by email) both count."""
        if user is None or not getattr(user, 'is_authenticated', False):
            return False
        if self.is_admin(user):
            return True
        return self.members.filter(email=user.get_roster_email()).exists()

    def get_allowed_emails(self):
        return list(self.members.order_by('email').values_list('email', flat=True))

    def get_settings(self):
        return normalize_settings(self.settings)


class PropertyMember(models.Model):
    """One roster entry: an email allowed into the property."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name='members')
    email = models.EmailField(max_length=255)
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'property_members'
        unique_together = [['property', 'email']]
        indexes = [
            models.Index(fields=['email'], name='property_members_email_idx'),
        ]
        ordering = ['email']

    def __str__(self):
        return f"{self.email} in {self.property.name}"

    def save(self, *args, **kwargs):
        self.email = normalize_member_email(self.email)
        super().save(*args, **kwargs)
