from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['email', 'display_name', 'is_active', 'created_at', 'last_login']
    list_filter = ['is_active', 'is_staff']
    search_fields = ['email', 'display_name']
    ordering = ['email']
    readonly_fields = ['created_at', 'last_login']

    fieldsets = (
        (None, {'fields': ('email', 'display_name', 'password')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Activity', {'fields': ('created_at', 'last_login')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
    )
