from django.contrib import admin
from .models import PromotedPoll


@admin.register(PromotedPoll)
class PromotedPollAdmin(admin.ModelAdmin):
    list_display = ['title', 'user', 'budget_amount', 'currency', 'target_votes', 'status', 'created_at']
    list_filter = ['status', 'currency', 'created_at']
    search_fields = ['title', 'user__username']
    readonly_fields = ['id', 'created_at', 'updated_at']
    ordering = ['-created_at']
