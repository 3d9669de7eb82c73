"""
Promoted poll service for paying for campaigns.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction

from apps.common.results import Success, Failure, service_result
from apps.payments.models import PaymentMethod
from apps.payments.services import PaymentService
from ..models import PromotedPoll

logger = logging.getLogger(__name__)


class PromotedPollService:
    """Service for promoted poll payments"""

    def __init__(self, payment_service=None):
        self.payment_service = payment_service or PaymentService()

    @service_result('Failed to get promoted poll')
    def get_user_promoted_poll(self, user_id, promoted_poll_id):
        try:
            poll = PromotedPoll.objects.filter(pk=promoted_poll_id, user_id=user_id).first()
        except (ValidationError, ValueError):
            poll = None

        if poll is None:
            return Failure('Promoted poll not found')
        return Success(poll)

    @service_result('Failed to retry payment')
    def retry_promoted_poll_payment(self, user_id, promoted_poll_id, method_type):
        """
        Pay again for a campaign whose earlier payment did not complete.

        Wallet payments settle immediately and move the poll to
        pending_approval. Stripe returns a client secret and Paystack an
        authorization URL; those polls are moved on by the gateway webhooks.
        """
        found = self.get_user_promoted_poll(user_id, promoted_poll_id)
        if not found.ok:
            return found
        poll = found.data

        if not poll.awaiting_payment:
            return Failure('Payment can only be retried for polls awaiting payment')

        logger.info(f"Retrying payment for promoted poll {poll.id} with {method_type}")

        if method_type == PaymentMethod.TYPE_WALLET:
            with transaction.atomic():
                # Concurrent retries for one poll queue here; only the first still sees it awaiting payment
                poll = PromotedPoll.objects.select_for_update().get(pk=poll.pk)
                if not poll.awaiting_payment:
                    return Failure('Payment can only be retried for polls awaiting payment')

                paid = self.payment_service.process_wallet_payment(
                    user_id, poll.budget_amount, promoted_poll_id=poll.id, currency=poll.currency
                )
                if not paid.ok:
                    return paid

                poll.status = PromotedPoll.STATUS_PENDING_APPROVAL
                poll.save(update_fields=['status', 'updated_at'])

            return Success({'transaction_id': str(paid.data.id), 'status': paid.data.status})

        if method_type == PaymentMethod.TYPE_STRIPE:
            return self.payment_service.initialize_stripe_payment(
                user_id, poll.budget_amount, promoted_poll_id=poll.id, currency=poll.currency
            )

        if method_type == PaymentMethod.TYPE_PAYSTACK:
            return self.payment_service.initialize_paystack_payment(
                user_id, poll.budget_amount, promoted_poll_id=poll.id, currency=poll.currency
            )

        return Failure('Payment method not supported')
