"""
Wallet payment, gateway initiation and currency conversion views.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
import logging

from apps.common.currency import quantize_amount
from apps.common.utils import error_response, result_response
from ..serializers import (
    TransactionSerializer, WalletPaymentSerializer, GatewayPaymentSerializer, ConvertAmountSerializer
)
from ..services import PaymentService

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def pay_with_wallet(request):
    """Pay from the caller's points balance"""
    serializer = WalletPaymentSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response("Invalid payment data", serializer.errors)

    data = serializer.validated_data
    result = PaymentService().process_wallet_payment(
        request.user.id,
        data['amount'],
        promoted_poll_id=data.get('promoted_poll_id'),
        currency=data['currency'],
        idempotency_key=data.get('idempotency_key') or None,
    )
    return result_response(
        result,
        "Wallet payment completed successfully",
        serializer=lambda record: TransactionSerializer(record).data
    )


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def initialize_stripe_payment(request):
    """Create a Stripe payment intent and return its client secret"""
    serializer = GatewayPaymentSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response("Invalid payment data", serializer.errors)

    data = serializer.validated_data
    result = PaymentService().initialize_stripe_payment(
        request.user.id,
        data['amount'],
        promoted_poll_id=data.get('promoted_poll_id'),
        currency=data['currency'],
    )
    return result_response(result, "Stripe payment initialized successfully")


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def initialize_paystack_payment(request):
    """Create a Paystack payment and return its authorization URL"""
    serializer = GatewayPaymentSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response("Invalid payment data", serializer.errors)

    data = serializer.validated_data
    result = PaymentService().initialize_paystack_payment(
        request.user.id,
        data['amount'],
        promoted_poll_id=data.get('promoted_poll_id'),
        currency=data['currency'],
    )
    return result_response(result, "Paystack payment initialized successfully")


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def convert_amount(request):
    """Convert an amount between two currencies"""
    query = ConvertAmountSerializer(data=request.query_params)
    if not query.is_valid():
        return error_response("Invalid query parameters", query.errors)

    data = query.validated_data
    result = PaymentService().convert_amount(data['amount'], data['from_currency'], data['to_currency'])
    return result_response(
        result,
        "Amount converted successfully",
        serializer=lambda amount: {
            'amount': str(quantize_amount(amount)),
            'from_currency': data['from_currency'],
            'to_currency': data['to_currency'],
        }
    )
