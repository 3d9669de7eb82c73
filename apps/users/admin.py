from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """User admin with wallet fields"""
    list_display = ['username', 'email', 'role', 'points', 'currency', 'country', 'is_staff', 'created_at']
    list_filter = ['role', 'is_staff', 'is_active', 'currency', 'country']
    search_fields = ['username', 'email']
    ordering = ['-created_at']

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Wallet', {
            'fields': ('role', 'points', 'currency', 'country')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
    readonly_fields = ['created_at', 'updated_at']
