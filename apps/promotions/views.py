"""
Retry payment views for promoted polls.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
import logging

from apps.common.utils import success_response, error_response
from .serializers import RetryPaymentSubmitSerializer, RetryPaymentConfirmSerializer
from .services import PromotedPollService, RetryPaymentController

logger = logging.getLogger(__name__)


def _open_controller(request, promoted_poll_id):
    found = PromotedPollService().get_user_promoted_poll(request.user.id, promoted_poll_id)
    if not found.ok:
        return None, error_response(found.error, status_code=status.HTTP_404_NOT_FOUND)
    return RetryPaymentController(request.user, found.data).open(), None


def _controller_response(controller, message):
    data = controller.as_dict()
    errors = [n for n in data['notifications'] if n['level'] == 'error']
    if errors:
        return error_response(errors[-1]['message'], errors=data)
    return success_response(data, message)


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def retry_payment(request, promoted_poll_id):
    """
    GET returns the payment options for a campaign awaiting payment.
    POST retries the payment with the chosen (or default) method.
    """
    controller, failed = _open_controller(request, promoted_poll_id)
    if failed:
        return failed

    if request.method == 'GET':
        return _controller_response(controller, "Retry payment options retrieved successfully")

    serializer = RetryPaymentSubmitSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response("Invalid payment data", serializer.errors)

    method_id = serializer.validated_data.get('payment_method_id')
    if method_id:
        controller.select_method(method_id)

    controller.submit()
    return _controller_response(controller, "Payment retried successfully")


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def confirm_retry_payment(request, promoted_poll_id):
    """Record the outcome of the card form for a retried Stripe payment"""
    serializer = RetryPaymentConfirmSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response("Invalid confirmation data", serializer.errors)

    found = PromotedPollService().get_user_promoted_poll(request.user.id, promoted_poll_id)
    if not found.ok:
        return error_response(found.error, status_code=status.HTTP_404_NOT_FOUND)

    data = serializer.validated_data
    controller = RetryPaymentController(request.user, found.data)
    controller.state = RetryPaymentController.CARD_FORM
    controller.transaction_id = str(data['transaction_id'])

    if data.get('error'):
        controller.card_payment_failed(data['error'])
    else:
        controller.confirm_card_payment(data['payment_intent_id'], data['transaction_id'])

    return _controller_response(controller, "Payment confirmed successfully")
