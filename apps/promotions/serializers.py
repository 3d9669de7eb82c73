"""
Serializers for the retry payment endpoints.
"""
from rest_framework import serializers


class RetryPaymentSubmitSerializer(serializers.Serializer):
    """Body for POST /api/promotions/<id>/retry-payment/"""

    payment_method_id = serializers.UUIDField(required=False, allow_null=True)


class RetryPaymentConfirmSerializer(serializers.Serializer):
    """Body for POST /api/promotions/<id>/retry-payment/confirm/"""

    transaction_id = serializers.UUIDField()
    payment_intent_id = serializers.CharField(max_length=200, required=False, allow_blank=True)
    error = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get('error') and not attrs.get('payment_intent_id'):
            raise serializers.ValidationError("payment_intent_id is required unless an error is reported")
        return attrs
