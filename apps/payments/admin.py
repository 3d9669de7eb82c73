from django.contrib import admin
from .models import PaymentMethod, Transaction


@admin.register(PaymentMethod)
class PaymentMethodAdmin(admin.ModelAdmin):
    list_display = ['name', 'type', 'is_active', 'created_at']
    list_filter = ['is_active', 'type']
    search_fields = ['name', 'description']
    ordering = ['name']

    fieldsets = (
        (None, {
            'fields': ('name', 'type', 'description', 'is_active')
        }),
        ('Configuration', {
            'fields': ('config',),
            'classes': ('collapse',)
        }),
    )


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = [
        'id', 'user', 'payment_method', 'amount', 'currency',
        'original_amount', 'original_currency', 'status', 'created_at'
    ]
    list_filter = ['status', 'payment_method', 'currency', 'created_at']
    search_fields = ['id', 'gateway_transaction_id', 'stripe_payment_intent_id', 'user__username']
    readonly_fields = ['id', 'idempotency_key', 'created_at', 'updated_at']
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('id', 'user', 'promoted_poll', 'payment_method', 'status')
        }),
        ('Amounts', {
            'fields': ('amount', 'currency', 'original_amount', 'original_currency')
        }),
        ('Gateway', {
            'fields': ('gateway_transaction_id', 'stripe_payment_intent_id'),
            'classes': ('collapse',)
        }),
        ('Additional Data', {
            'fields': ('metadata', 'idempotency_key', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        if obj:  # Transactions are settled, never edited by hand
            return self.readonly_fields + ['user', 'promoted_poll', 'payment_method', 'amount', 'currency']
        return self.readonly_fields

    def has_delete_permission(self, request, obj=None):
        return False
