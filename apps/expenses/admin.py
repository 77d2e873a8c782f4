from django.contrib import admin
from .models import SharedExpense, MemberTag, MemberShare


@admin.register(SharedExpense)
class SharedExpenseAdmin(admin.ModelAdmin):
    list_display = ['name', 'property', 'amount', 'frequency', 'created_at']
    list_filter = ['frequency']
    search_fields = ['name', 'property__name']
    readonly_fields = ['id', 'created_at']


@admin.register(MemberTag)
class MemberTagAdmin(admin.ModelAdmin):
    list_display = ['name', 'property', 'share_percentage', 'fixed_fee']
    search_fields = ['name', 'property__name']


@admin.register(MemberShare)
class MemberShareAdmin(admin.ModelAdmin):
    list_display = ['member_email', 'property', 'tag_id', 'share_percentage', 'custom_amount', 'updated_at']
    search_fields = ['member_email', 'property__name']
    readonly_fields = ['id', 'created_at', 'updated_at']
