"""
Transaction history and status views.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
import logging

from apps.common.utils import error_response, result_response
from ..models import Transaction
from ..serializers import (
    TransactionSerializer, TransactionListQuerySerializer, TransactionStatusSerializer
)
from ..services import PaymentService

logger = logging.getLogger(__name__)


def _serialize_page(page):
    return {
        'transactions': TransactionSerializer(page['transactions'], many=True).data,
        'total_count': page['total_count'],
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_user_transactions(request):
    """Get the caller's transaction history, newest first"""
    query = TransactionListQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return error_response("Invalid query parameters", query.errors)

    params = query.validated_data
    result = PaymentService().get_user_transactions(
        request.user.id,
        limit=params['limit'],
        offset=params['offset'],
        status=params.get('status'),
        currency=params.get('currency'),
    )
    return result_response(result, "Transactions retrieved successfully", serializer=_serialize_page)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_all_transactions(request):
    """Get every user's transactions (admin only)"""
    query = TransactionListQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return error_response("Invalid query parameters", query.errors)

    params = query.validated_data
    result = PaymentService().get_all_transactions(
        request.user.id,
        limit=params['limit'],
        offset=params['offset'],
        status=params.get('status'),
        payment_method=params.get('payment_method'),
        currency=params.get('currency'),
    )
    return result_response(
        result,
        "Transactions retrieved successfully",
        serializer=_serialize_page,
        error_status=status.HTTP_403_FORBIDDEN
    )


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def update_transaction_status(request, transaction_id):
    """Settle a transaction by hand (admin only)"""
    if not request.user.is_admin:
        logger.warning(f"User {request.user.id} tried to settle transaction {transaction_id}")
        return error_response(
            "Unauthorized: Only admins can update transaction status",
            status_code=status.HTTP_403_FORBIDDEN
        )

    serializer = TransactionStatusSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response("Invalid status data", serializer.errors)

    if not Transaction.objects.filter(pk=transaction_id).exists():
        return error_response("Transaction not found", status_code=status.HTTP_404_NOT_FOUND)

    data = serializer.validated_data
    result = PaymentService().update_transaction_status(
        transaction_id,
        data['status'],
        gateway_transaction_id=data.get('gateway_transaction_id') or None,
    )
    return result_response(
        result,
        "Transaction status updated successfully",
        serializer=lambda record: TransactionSerializer(record).data
    )
