"""
API tests for the payment and retry payment endpoints
"""
from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from apps.common.models import SystemSetting
from apps.payments.models import Transaction
from apps.promotions.models import PromotedPoll
from tests.factories import (
    UserFactory, AdminUserFactory, ExchangeRateFactory, PromotedPollFactory, TransactionFactory,
    create_standard_payment_methods, gateway_response
)

POST = 'apps.payments.services.gateway_client.requests.post'


class PaymentAPITestCase(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.methods = create_standard_payment_methods()
        SystemSetting.set_value(SystemSetting.PROMOTED_POLLS, {'points_to_usd_conversion': 100})
        ExchangeRateFactory(from_currency='EUR', to_currency='USD', rate=Decimal('1.1'))
        self.user = UserFactory(points=10000, country='US')
        self.client.force_authenticate(user=self.user)


class TestPaymentMethodEndpoints(PaymentAPITestCase):

    def test_requires_authentication(self):
        response = APIClient().get(reverse('payments:payment_methods'))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['msg'] == 'Authentication required'

    def test_list_methods(self):
        response = self.client.get(reverse('payments:payment_methods'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['code'] == 200
        assert [m['name'] for m in response.data['data']] == ['Credit/Debit Card', 'Paystack', 'Wallet']

    def test_available_methods_filtered_by_currency(self):
        response = self.client.get(reverse('payments:available_payment_methods'), {'currency': 'eur'})

        assert response.status_code == status.HTTP_200_OK
        assert {m['type'] for m in response.data['data']} == {'wallet', 'stripe'}

    def test_method_detail_not_found(self):
        url = reverse('payments:payment_method', args=['00000000-0000-0000-0000-000000000000'])

        response = self.client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['msg'] == 'Payment method not found'


class TestWalletEndpoint(PaymentAPITestCase):

    def test_pay_with_wallet(self):
        response = self.client.post(
            reverse('payments:wallet_pay'),
            {'amount': '50.00', 'currency': 'EUR', 'idempotency_key': 'k-1'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK, response.data
        assert response.data['data']['status'] == 'completed'
        assert response.data['data']['metadata']['points_used'] == 5500

    def test_insufficient_points(self):
        self.user.points = 0
        self.user.save()

        response = self.client.post(reverse('payments:wallet_pay'), {'amount': '1.00'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['msg'] == 'Insufficient points. You need 100 points (0 available).'

    def test_invalid_amount(self):
        response = self.client.post(reverse('payments:wallet_pay'), {'amount': '-3'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'amount' in response.data['errors']


class TestGatewayEndpoints(PaymentAPITestCase):

    @patch(POST)
    def test_stripe_initialize(self, mock_post):
        mock_post.return_value = gateway_response(200, {'clientSecret': 'cs_1', 'paymentIntentId': 'pi_1'})

        response = self.client.post(reverse('payments:stripe_initialize'), {'amount': '10.00'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['client_secret'] == 'cs_1'

    @patch(POST)
    def test_paystack_failure(self, mock_post):
        mock_post.return_value = gateway_response(400, {'error': 'Invalid amount'})

        response = self.client.post(reverse('payments:paystack_initialize'), {'amount': '10.00'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['msg'] == 'Invalid amount'
        assert Transaction.objects.get(user=self.user).status == Transaction.STATUS_FAILED

    def test_convert(self):
        response = self.client.get(
            reverse('payments:convert_amount'),
            {'amount': '50', 'from_currency': 'eur', 'to_currency': 'usd'}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['amount'] == '55.00'


class TestTransactionEndpoints(PaymentAPITestCase):

    def test_history(self):
        TransactionFactory(user=self.user)
        TransactionFactory()

        response = self.client.get(reverse('payments:user_transactions'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['total_count'] == 1

    def test_all_transactions_forbidden_for_users(self):
        response = self.client.get(reverse('payments:all_transactions'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_all_transactions_for_admin(self):
        TransactionFactory(user=self.user)
        admin = AdminUserFactory()
        self.client.force_authenticate(user=admin)

        response = self.client.get(reverse('payments:all_transactions'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['total_count'] == 1

    def test_status_update_refused_for_owner(self):
        record = TransactionFactory(user=self.user)

        response = self.client.post(
            reverse('payments:transaction_status', args=[record.id]),
            {'status': 'completed', 'gateway_transaction_id': 'fake'},
            format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        record.refresh_from_db()
        assert record.status == Transaction.STATUS_PENDING

    def test_status_update_by_admin(self):
        record = TransactionFactory(user=self.user)
        self.client.force_authenticate(user=AdminUserFactory())

        response = self.client.post(
            reverse('payments:transaction_status', args=[record.id]),
            {'status': 'completed', 'gateway_transaction_id': 'pi_5'},
            format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['status'] == 'completed'

    def test_status_update_unknown_transaction(self):
        self.client.force_authenticate(user=AdminUserFactory())

        response = self.client.post(
            reverse('payments:transaction_status', args=['00000000-0000-0000-0000-000000000000']),
            {'status': 'completed'},
            format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestRetryPaymentEndpoints(PaymentAPITestCase):

    def setUp(self):
        super().setUp()
        self.poll = PromotedPollFactory(user=self.user, budget_amount=Decimal('50'), currency='EUR')

    def test_get_retry_options(self):
        response = self.client.get(reverse('promotions:retry_payment', args=[self.poll.id]))

        assert response.status_code == status.HTTP_200_OK
        data = response.data['data']
        assert data['state'] == 'selectable'
        assert data['points_required'] == 5500
        assert data['selected_method_id'] == str(self.methods['wallet'].id)

    def test_submit_wallet(self):
        response = self.client.post(reverse('promotions:retry_payment', args=[self.poll.id]), {}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['state'] == 'completed'
        self.poll.refresh_from_db()
        assert self.poll.status == PromotedPoll.STATUS_PENDING_APPROVAL

    @patch(POST)
    def test_submit_stripe_then_confirm(self, mock_post):
        mock_post.return_value = gateway_response(200, {'clientSecret': 'cs_1', 'paymentIntentId': 'pi_1'})

        submitted = self.client.post(
            reverse('promotions:retry_payment', args=[self.poll.id]),
            {'payment_method_id': str(self.methods['stripe'].id)},
            format='json'
        )

        assert submitted.status_code == status.HTTP_200_OK
        assert submitted.data['data']['state'] == 'card_form'
        transaction_id = submitted.data['data']['transaction_id']

        confirmed = self.client.post(
            reverse('promotions:confirm_retry_payment', args=[self.poll.id]),
            {'transaction_id': transaction_id, 'payment_intent_id': 'pi_1'},
            format='json'
        )

        assert confirmed.status_code == status.HTTP_200_OK
        assert confirmed.data['data']['state'] == 'completed'
        assert Transaction.objects.get(pk=transaction_id).status == Transaction.STATUS_COMPLETED

    def test_confirm_with_made_up_intent_is_refused(self):
        record = TransactionFactory(user=self.user, promoted_poll=self.poll, stripe_payment_intent_id='pi_real')

        response = self.client.post(
            reverse('promotions:confirm_retry_payment', args=[self.poll.id]),
            {'transaction_id': str(record.id), 'payment_intent_id': 'pi_fake'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['msg'] == 'Payment could not be verified'
        record.refresh_from_db()
        assert record.status == Transaction.STATUS_PENDING

    def test_confirm_reports_card_error(self):
        record = TransactionFactory(user=self.user, promoted_poll=self.poll)

        response = self.client.post(
            reverse('promotions:confirm_retry_payment', args=[self.poll.id]),
            {'transaction_id': str(record.id), 'error': 'Card declined'},
            format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['msg'] == 'Payment failed: Card declined'

    def test_other_users_poll(self):
        other = PromotedPollFactory()

        response = self.client.get(reverse('promotions:retry_payment', args=[other.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND
