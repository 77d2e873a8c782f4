from django.contrib import admin
from .models import Property, PropertyMember


class PropertyMemberInline(admin.TabularInline):
    model = PropertyMember
    extra = 0
    readonly_fields = ['added_at']


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'created_at']
    search_fields = ['name', 'owner__email']
    readonly_fields = ['id', 'created_at', 'updated_at']
    filter_horizontal = ['admins']
    inlines = [PropertyMemberInline]


@admin.register(PropertyMember)
class PropertyMemberAdmin(admin.ModelAdmin):
    list_display = ['email', 'property', 'added_at']
    search_fields = ['email', 'property__name']
