from django.db import models
from django.conf import settings


class SystemSetting(models.Model):
    """Site settings grouped by category, each stored as a JSON document"""

    PROMOTED_POLLS = 'promoted_polls'
    INTEGRATIONS = 'integrations'
    PAYMENT_GATEWAYS = 'payment_gateways'
    CURRENCIES = 'currencies'

    CATEGORY_CHOICES = [
        (PROMOTED_POLLS, 'Promoted Polls'),
        (INTEGRATIONS, 'Integrations'),
        (PAYMENT_GATEWAYS, 'Payment Gateways'),
        (CURRENCIES, 'Currencies'),
    ]

    key = models.CharField(max_length=100, unique=True, choices=CATEGORY_CHOICES)
    value = models.JSONField(default=dict)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True
    )

    class Meta:
        db_table = 'system_settings'
        ordering = ['key']

    def __str__(self):
        return self.key

    @classmethod
    def get_value(cls, key, default=None):
        """Get settings document by category key"""
        try:
            setting = cls.objects.get(key=key, is_active=True)
            return setting.value
        except cls.DoesNotExist:
            return default

    @classmethod
    def set_value(cls, key, value, description='', user=None):
        """Create or replace a settings document"""
        setting, created = cls.objects.get_or_create(
            key=key,
            defaults={
                'value': value,
                'description': description,
                'updated_by': user
            }
        )

        if not created:
            setting.value = value
            setting.description = description or setting.description
            setting.updated_by = user
            setting.save()

        return setting
