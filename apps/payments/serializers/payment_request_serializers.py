"""
Request serializers for wallet payments, gateway initiation and conversion.
"""
from decimal import Decimal

from rest_framework import serializers


class GatewayPaymentSerializer(serializers.Serializer):
    """Body for the Stripe and Paystack initialize endpoints"""

    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0.01'))
    currency = serializers.CharField(max_length=3, required=False, default='USD')
    promoted_poll_id = serializers.UUIDField(required=False, allow_null=True)

    def validate_currency(self, value):
        return value.upper()


class WalletPaymentSerializer(GatewayPaymentSerializer):
    """Body for POST /api/payments/wallet/pay/"""

    idempotency_key = serializers.CharField(max_length=100, required=False, allow_blank=True)


class ConvertAmountSerializer(serializers.Serializer):
    """Query parameters for GET /api/payments/convert/"""

    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    from_currency = serializers.CharField(max_length=3)
    to_currency = serializers.CharField(max_length=3)

    def validate_from_currency(self, value):
        return value.upper()

    def validate_to_currency(self, value):
        return value.upper()
