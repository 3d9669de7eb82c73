import uuid

from django.db import models


class PaymentMethod(models.Model):
    """Payment methods offered to users"""

    TYPE_WALLET = 'wallet'
    TYPE_STRIPE = 'stripe'
    TYPE_PAYPAL = 'paypal'
    TYPE_PAYSTACK = 'paystack'

    TYPE_CHOICES = [
        (TYPE_WALLET, 'Wallet'),
        (TYPE_STRIPE, 'Stripe'),
        (TYPE_PAYPAL, 'PayPal'),
        (TYPE_PAYSTACK, 'Paystack'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True, help_text="Display name for frontend")
    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    description = models.TextField(blank=True, default='')
    is_active = models.BooleanField(default=True, help_text="Whether this payment method is available")

    # supported_currencies (list of codes) and/or default_currency
    config = models.JSONField(default=dict, blank=True, help_text="Payment method configuration")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payment_methods'
        ordering = ['name']

    def __str__(self):
        return self.name

    def supports_currency(self, currency):
        """
        Whether this method can take payments in ``currency``.

        An explicit supported_currencies list wins, then default_currency;
        methods with neither accept every currency.
        """
        config = self.config or {}
        supported = config.get('supported_currencies')
        if supported is not None:
            return currency in supported

        default_currency = config.get('default_currency')
        if default_currency:
            return default_currency == currency

        return True
