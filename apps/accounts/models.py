# ==========================================
# apps/accounts/models.py
# ==========================================

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid

from .emails import normalize_member_email  # noqa: F401


class UserManager(BaseUserManager):
    """Email-login manager. Stored emails are always roster-normalized."""

    use_in_migrations = True

    def _create(self, email, password, **extra_fields):
        email = normalize_member_email(email)
        if not email:
            raise ValueError('Email is required')
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        if not (extra_fields['is_staff'] and extra_fields['is_superuser']):
            raise ValueError('Superuser must have is_staff=True and is_superuser=True')
        return self._create(email, password, **extra_fields)

    def get_by_natural_key(self, username):
        return self.get(email=normalize_member_email(username))


class User(AbstractBaseUser, PermissionsMixin):
    """
    Account of a person using the app.

    Property rosters list emails, not accounts, so a user sees every
    property whose roster holds their email, including ones added
    before they registered. Bookings and admin rights use the id.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=150, blank=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_idx'),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Name shown on bookings; falls back to the email's local part."""
        return self.display_name or self.email.split('@')[0]

    def get_roster_email(self):
        return normalize_member_email(self.email)
