"""
Transaction serializers for history listing and status updates.
"""
from rest_framework import serializers
from ..models import PaymentMethod, Transaction


class TransactionSerializer(serializers.ModelSerializer):
    """
    Serializer for transaction records.
    Used for: GET /api/payments/transactions/ and the payment endpoints
    """
    user_id = serializers.IntegerField(read_only=True)
    promoted_poll_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Transaction
        fields = [
            'id', 'user_id', 'promoted_poll_id', 'amount', 'currency',
            'original_amount', 'original_currency', 'payment_method', 'status',
            'gateway_transaction_id', 'stripe_payment_intent_id', 'metadata',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class TransactionListQuerySerializer(serializers.Serializer):
    """Filters and paging for transaction history"""

    limit = serializers.IntegerField(required=False, default=50, min_value=1, max_value=200)
    offset = serializers.IntegerField(required=False, default=0, min_value=0)
    status = serializers.ChoiceField(choices=Transaction.STATUS_CHOICES, required=False)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.TYPE_CHOICES, required=False)
    currency = serializers.CharField(max_length=3, required=False)


class TransactionStatusSerializer(serializers.Serializer):
    """Body for POST /api/payments/transactions/<id>/status/"""

    status = serializers.ChoiceField(choices=[
        (status, label) for status, label in Transaction.STATUS_CHOICES
        if status in Transaction.TERMINAL_STATUSES
    ])
    gateway_transaction_id = serializers.CharField(max_length=200, required=False, allow_blank=True)
