"""
Tests for the promoted poll retry payment flow
"""
from decimal import Decimal
from unittest.mock import MagicMock, patch

from django.test import TestCase

from apps.common.models import SystemSetting
from apps.common.results import Success
from apps.payments.config import PaymentGatewayConfig
from apps.payments.models import PaymentMethod, Transaction
from apps.payments.services import PaymentService
from apps.promotions.models import PromotedPoll
from apps.promotions.services import PromotedPollService, RetryPaymentController
from tests.factories import (
    UserFactory, ExchangeRateFactory, PromotedPollFactory, TransactionFactory,
    create_standard_payment_methods, gateway_response
)

POST = 'apps.payments.services.gateway_client.requests.post'


class RetryFlowTestCase(TestCase):

    def setUp(self):
        self.methods = create_standard_payment_methods()
        SystemSetting.set_value(SystemSetting.PROMOTED_POLLS, {'points_to_usd_conversion': 100})
        SystemSetting.set_value(SystemSetting.PAYMENT_GATEWAYS, {
            'default': ['wallet', 'stripe', 'paystack'],
        })
        SystemSetting.set_value(SystemSetting.CURRENCIES, {'supported': ['USD', 'EUR', 'NGN']})
        ExchangeRateFactory(from_currency='EUR', to_currency='USD', rate=Decimal('1.1'))
        ExchangeRateFactory(from_currency='USD', to_currency='NGN', rate=Decimal('1500'))
        self.user = UserFactory(points=10000, country='US')
        self.poll = PromotedPollFactory(user=self.user, budget_amount=Decimal('50'), currency='EUR')

    def controller(self, **kwargs):
        return RetryPaymentController(self.user, self.poll, **kwargs)


class TestPromotedPollService(RetryFlowTestCase):

    def test_wallet_retry_moves_poll_to_pending_approval(self):
        result = PromotedPollService().retry_promoted_poll_payment(self.user.id, self.poll.id, 'wallet')

        assert result.ok, result
        self.poll.refresh_from_db()
        assert self.poll.status == PromotedPoll.STATUS_PENDING_APPROVAL
        assert Transaction.objects.get(pk=result.data['transaction_id']).promoted_poll == self.poll

    def test_wallet_failure_leaves_poll_unchanged(self):
        self.user.points = 10
        self.user.save()

        result = PromotedPollService().retry_promoted_poll_payment(self.user.id, self.poll.id, 'wallet')

        assert not result.ok
        self.poll.refresh_from_db()
        assert self.poll.status == PromotedPoll.STATUS_PAYMENT_FAILED

    def test_unsupported_method(self):
        result = PromotedPollService().retry_promoted_poll_payment(self.user.id, self.poll.id, 'paypal')

        assert result.error == 'Payment method not supported'

    def test_poll_must_belong_to_user(self):
        stranger = UserFactory()

        result = PromotedPollService().retry_promoted_poll_payment(stranger.id, self.poll.id, 'wallet')

        assert result.error == 'Promoted poll not found'

    def test_poll_must_await_payment(self):
        self.poll.status = PromotedPoll.STATUS_ACTIVE
        self.poll.save()

        result = PromotedPollService().retry_promoted_poll_payment(self.user.id, self.poll.id, 'wallet')

        assert result.error == 'Payment can only be retried for polls awaiting payment'

    def test_second_wallet_retry_charges_once(self):
        service = PromotedPollService()

        first = service.retry_promoted_poll_payment(self.user.id, self.poll.id, 'wallet')
        second = service.retry_promoted_poll_payment(self.user.id, self.poll.id, 'wallet')

        assert first.ok
        assert second.error == 'Payment can only be retried for polls awaiting payment'
        assert Transaction.objects.filter(promoted_poll=self.poll).count() == 1
        self.user.refresh_from_db()
        assert self.user.points == 4500

    def test_wallet_retry_rechecks_locked_poll(self):
        stale = PromotedPoll.objects.get(pk=self.poll.pk)
        PromotedPoll.objects.filter(pk=self.poll.pk).update(status=PromotedPoll.STATUS_PENDING_APPROVAL)

        with patch.object(PromotedPollService, 'get_user_promoted_poll', return_value=Success(stale)):
            result = PromotedPollService().retry_promoted_poll_payment(self.user.id, self.poll.id, 'wallet')

        assert result.error == 'Payment can only be retried for polls awaiting payment'
        assert not Transaction.objects.exists()
        self.user.refresh_from_db()
        assert self.user.points == 10000


class TestRetryPaymentControllerOpen(RetryFlowTestCase):

    def test_open_loads_options_and_defaults_to_wallet(self):
        controller = self.controller().open()

        assert controller.state == RetryPaymentController.SELECTABLE
        assert controller.stripe_public_key == 'pk_test_51TestKey'
        assert controller.selected_method == self.methods['wallet']
        assert controller.supported_currencies == ['USD', 'EUR', 'NGN']
        # Paystack does not list EUR
        assert {m.type for m in controller.payment_methods} == {'wallet', 'stripe'}
        assert controller.points_required == 5500
        assert controller.can_submit

    def test_integration_setting_key_wins(self):
        SystemSetting.set_value(SystemSetting.INTEGRATIONS, {'stripePublicKey': 'pk_live_fromSettings'})

        controller = self.controller().open()

        assert controller.stripe_public_key == 'pk_live_fromSettings'

    def test_invalid_key_hides_stripe(self):
        config = PaymentGatewayConfig(
            project_url='https://project.example.test', anon_key='k',
            stripe_public_key='pk_test_placeholder_key_replace_with_actual_stripe_key',
        )
        controller = self.controller(payment_service=PaymentService(config=config)).open()

        assert controller.stripe_error == 'Stripe payment system is not configured'
        assert PaymentMethod.TYPE_STRIPE not in {m.type for m in controller.payment_methods}
        assert 'Credit card payments are currently unavailable' in controller.as_dict()['stripe_warning']

    def test_stripe_key_validation(self):
        assert RetryPaymentController.is_valid_stripe_key('pk_test_abc')
        assert RetryPaymentController.is_valid_stripe_key('pk_live_abc')
        assert not RetryPaymentController.is_valid_stripe_key('sk_test_abc')
        assert not RetryPaymentController.is_valid_stripe_key('your_stripe_publishable_key')
        assert not RetryPaymentController.is_valid_stripe_key('')
        assert not RetryPaymentController.is_valid_stripe_key(None)

    def test_first_method_selected_without_wallet(self):
        self.methods['wallet'].is_active = False
        self.methods['wallet'].save()

        controller = self.controller().open()

        assert controller.selected_method == self.methods['stripe']

    def test_insufficient_points_disables_submit(self):
        self.user.points = 100
        self.user.save()

        controller = self.controller().open()

        assert controller.has_insufficient_points
        assert not controller.can_submit
        assert 'You need 5,500 points' in controller.insufficient_points_message

        controller.submit()

        assert controller.state == RetryPaymentController.SELECTABLE
        assert controller.notifications[-1].level == 'error'
        assert not Transaction.objects.exists()

    def test_currency_notes(self):
        controller = self.controller().open()
        notes = {m['type']: m['currency_note'] for m in controller.as_dict()['payment_methods']}

        assert notes['stripe'] == 'Supports EUR'
        assert notes['wallet'] is None
        assert controller.currency_note(self.methods['paystack']) == (
            'Does not support EUR - payment will be converted to NGN'
        )


class TestRetryPaymentControllerSubmit(RetryFlowTestCase):

    def test_wallet_submit_completes(self):
        on_success, on_close = MagicMock(), MagicMock()
        controller = self.controller(on_success=on_success, on_close=on_close).open()

        controller.submit()

        assert controller.state == RetryPaymentController.COMPLETED
        assert controller.notifications[-1].message == 'Payment processed successfully!'
        on_success.assert_called_once()
        on_close.assert_called_once()
        self.user.refresh_from_db()
        assert self.user.points == 4500

    @patch(POST)
    def test_stripe_submit_shows_card_form(self, mock_post):
        mock_post.return_value = gateway_response(200, {'clientSecret': 'cs_1', 'paymentIntentId': 'pi_1'})
        controller = self.controller().open()
        controller.select_method(self.methods['stripe'].id)

        controller.submit()

        assert controller.state == RetryPaymentController.CARD_FORM
        assert controller.client_secret == 'cs_1'
        assert controller.transaction_id

    @patch(POST)
    def test_paystack_submit_redirects(self, mock_post):
        mock_post.return_value = gateway_response(200, {
            'authorizationUrl': 'https://checkout.paystack.test/x', 'reference': 'ref_x'
        })
        self.poll.currency = 'NGN'
        self.poll.save()
        controller = self.controller().open()
        controller.select_method(self.methods['paystack'].id)

        controller.submit()

        assert controller.state == RetryPaymentController.REDIRECT
        assert controller.authorization_url == 'https://checkout.paystack.test/x'

    @patch(POST)
    def test_gateway_error_returns_to_selection(self, mock_post):
        mock_post.return_value = gateway_response(400, {'error': 'Card network down'})
        controller = self.controller().open()
        controller.select_method(self.methods['stripe'].id)

        controller.submit()

        assert controller.state == RetryPaymentController.SELECTABLE
        assert controller.notifications[-1].message == 'Card network down'

    def test_unknown_method_selection(self):
        controller = self.controller().open()
        controller.select_method('00000000-0000-0000-0000-000000000000')

        controller.submit()

        assert controller.notifications[-1].message == 'Invalid payment method'

    def test_exceptions_become_notifications(self):
        service = MagicMock()
        service.retry_promoted_poll_payment.side_effect = RuntimeError('boom')
        controller = self.controller(promoted_poll_service=service).open()

        controller.submit()

        assert controller.state == RetryPaymentController.SELECTABLE
        assert controller.notifications[-1].message == 'boom'


class TestCardConfirmation(RetryFlowTestCase):

    def setUp(self):
        super().setUp()
        self.record = TransactionFactory(
            user=self.user, promoted_poll=self.poll, stripe_payment_intent_id='pi_9'
        )

    def test_confirm_completes_transaction(self):
        controller = self.controller()

        controller.confirm_card_payment('pi_9', self.record.id)

        assert controller.state == RetryPaymentController.COMPLETED
        assert controller.notifications[-1].message == (
            'Payment successful! Your poll promotion is pending approval.'
        )
        self.record.refresh_from_db()
        assert self.record.status == Transaction.STATUS_COMPLETED
        assert self.record.gateway_transaction_id == 'pi_9'

    def test_confirm_requires_own_transaction(self):
        foreign = TransactionFactory()
        controller = self.controller()

        controller.confirm_card_payment('pi_9', foreign.id)

        assert controller.notifications[-1].message == 'Transaction ID not found'
        foreign.refresh_from_db()
        assert foreign.status == Transaction.STATUS_PENDING

    def test_confirm_rejects_unknown_payment_intent(self):
        controller = self.controller()

        controller.confirm_card_payment('pi_made_up', self.record.id)

        assert controller.state != RetryPaymentController.COMPLETED
        assert controller.notifications[-1].message == 'Payment could not be verified'
        self.record.refresh_from_db()
        assert self.record.status == Transaction.STATUS_PENDING

    def test_card_error_keeps_dialog_open(self):
        on_close = MagicMock()
        controller = self.controller(on_close=on_close)
        controller.state = RetryPaymentController.CARD_FORM

        controller.card_payment_failed('Your card was declined.')

        assert controller.state == RetryPaymentController.SELECTABLE
        assert controller.notifications[-1].message == 'Payment failed: Your card was declined.'
        on_close.assert_not_called()
