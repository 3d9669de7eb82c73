"""
Payment method views.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
import logging

from apps.common.utils import error_response, result_response
from ..serializers import PaymentMethodSerializer, AvailableMethodsQuerySerializer
from ..services import PaymentService

logger = logging.getLogger(__name__)


def _serialize_methods(methods):
    return PaymentMethodSerializer(methods, many=True).data


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_payment_methods(request):
    """Get active payment methods"""
    result = PaymentService().get_payment_methods()
    return result_response(
        result,
        message="Payment methods retrieved successfully",
        serializer=_serialize_methods
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_available_payment_methods(request):
    """
    Get payment methods available for a country and currency.

    Defaults to the caller's profile country when none is given.
    """
    query = AvailableMethodsQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return error_response("Invalid query parameters", query.errors)

    country = query.validated_data.get('country') or request.user.country or None
    currency = query.validated_data.get('currency') or None

    result = PaymentService().get_available_payment_methods(country, currency)
    return result_response(
        result,
        message="Available payment methods retrieved successfully",
        serializer=_serialize_methods
    )


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_payment_method(request, method_id):
    """Get a single active payment method"""
    result = PaymentService().get_payment_method_by_id(method_id)
    return result_response(
        result,
        message="Payment method retrieved successfully",
        serializer=lambda method: PaymentMethodSerializer(method).data,
        error_status=status.HTTP_404_NOT_FOUND
    )
