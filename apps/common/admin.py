import json

from django.contrib import admin

from .models import SystemSetting, ExchangeRate


@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):
    """Admin interface for settings documents"""

    list_display = ['key', 'value_preview', 'is_active', 'updated_by', 'updated_at']
    list_filter = ['is_active', 'updated_at']
    search_fields = ['key', 'description']
    ordering = ['key']
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Setting', {
            'fields': ('key', 'value', 'description', 'is_active')
        }),
        ('Metadata', {
            'fields': ('updated_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def value_preview(self, obj):
        """Show preview of value"""
        text = json.dumps(obj.value)
        if len(text) > 50:
            return text[:50] + '...'
        return text
    value_preview.short_description = 'Value'

    def save_model(self, request, obj, form, change):
        """Set updated_by field"""
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)


@admin.register(ExchangeRate)
class ExchangeRateAdmin(admin.ModelAdmin):
    list_display = ['from_currency', 'to_currency', 'rate', 'updated_at']
    list_filter = ['from_currency', 'to_currency']
    search_fields = ['from_currency', 'to_currency']
    ordering = ['from_currency', 'to_currency']
    readonly_fields = ['updated_at']
