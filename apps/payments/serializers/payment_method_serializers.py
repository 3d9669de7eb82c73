"""
Payment method serializers.
"""
from rest_framework import serializers
from ..models import PaymentMethod


class PaymentMethodSerializer(serializers.ModelSerializer):
    """Serializer for payment methods"""

    class Meta:
        model = PaymentMethod
        fields = ['id', 'name', 'type', 'description', 'is_active', 'config']
        read_only_fields = fields


class AvailableMethodsQuerySerializer(serializers.Serializer):
    """Query parameters for GET /api/payments/methods/available/"""

    country = serializers.CharField(max_length=2, required=False, allow_blank=True)
    currency = serializers.CharField(max_length=3, required=False, allow_blank=True)

    def validate_country(self, value):
        return value.upper()

    def validate_currency(self, value):
        return value.upper()
