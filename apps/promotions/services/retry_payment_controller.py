"""
Retry payment flow for a promoted poll whose earlier payment did not complete.

The controller holds the state of one retry attempt: it loads the payment
options on ``open()``, tracks the selected method, and on ``submit()``
dispatches to PromotedPollService. Problems are reported as notifications,
never raised.
"""
import logging
from dataclasses import dataclass, asdict

from django.core.exceptions import ValidationError

from apps.common.currency import USD, build_rate_table, convert_locally, round_points, to_decimal
from apps.common.models import SystemSetting
from apps.common.services import SettingsService
from apps.payments.models import PaymentMethod, Transaction
from apps.payments.services import PaymentService
from apps.users.services import ProfileService
from .promoted_poll_service import PromotedPollService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: str
    message: str


class RetryPaymentController:
    """State machine behind the Retry Payment dialog"""

    LOADING = 'loading'
    SELECTABLE = 'selectable'
    PROCESSING = 'processing'
    CARD_FORM = 'card_form'
    REDIRECT = 'redirect'
    COMPLETED = 'completed'

    PLACEHOLDER_STRIPE_KEYS = frozenset([
        'your_stripe_publishable_key',
        'pk_test_placeholder_key_replace_with_actual_stripe_key',
    ])

    STRIPE_UNAVAILABLE = (
        'Stripe payment system is not available. '
        'Please contact support or use an alternative payment method.'
    )

    def __init__(self, user, promoted_poll, payment_service=None, promoted_poll_service=None,
                 on_success=None, on_close=None):
        self.user = user
        self.promoted_poll = promoted_poll
        self.payment_service = payment_service or PaymentService()
        self.promoted_poll_service = promoted_poll_service or PromotedPollService(self.payment_service)
        self.on_success = on_success
        self.on_close = on_close

        self.state = self.LOADING
        self.notifications = []

        self.stripe_public_key = None
        self.stripe_error = None
        self.payment_methods = []
        self.selected_method_id = None
        self.supported_currencies = [USD]
        self.points_per_usd = PaymentService.DEFAULT_POINTS_PER_USD
        self.rate_table = {}
        self.points_balance = getattr(user, 'points', 0)

        self.client_secret = None
        self.transaction_id = None
        self.authorization_url = None

    @property
    def poll_currency(self):
        return self.promoted_poll.currency or USD

    @classmethod
    def is_valid_stripe_key(cls, key):
        return bool(
            key
            and key not in cls.PLACEHOLDER_STRIPE_KEYS
            and (key.startswith('pk_test_') or key.startswith('pk_live_'))
        )

    def notify(self, level, message):
        self.notifications.append(Notification(level, message))

    # Loading

    def open(self):
        """Load everything the dialog shows and make methods selectable"""
        self.state = self.LOADING
        self._load_stripe_key()
        self._load_payment_methods()
        self._load_currencies()
        self._load_points_settings()
        self._load_exchange_rates()
        self._load_points_balance()
        self.state = self.SELECTABLE
        return self

    def _load_stripe_key(self):
        self.stripe_public_key = None
        self.stripe_error = None

        integrations = SettingsService.get_settings(SystemSetting.INTEGRATIONS)
        if not integrations.ok:
            logger.error(f"Error loading Stripe key from settings: {integrations.error}")
            self.stripe_error = 'Failed to load payment configuration'
            return

        key = integrations.data.get('stripePublicKey')
        if not self.is_valid_stripe_key(key):
            key = self.payment_service.config.stripe_public_key

        if self.is_valid_stripe_key(key):
            self.stripe_public_key = key
        else:
            logger.warning('No valid Stripe public key found')
            self.stripe_error = 'Stripe payment system is not configured'

    def _load_payment_methods(self):
        result = self.payment_service.get_available_payment_methods(
            self.user.country or None, self.poll_currency
        )
        if not result.ok:
            self.notify('error', result.error)
            return

        self.payment_methods = [
            method for method in result.data
            if not (method.type == PaymentMethod.TYPE_STRIPE and self.stripe_error)
        ]

        wallet = self.wallet_method
        if wallet is not None:
            self.selected_method_id = str(wallet.id)
        elif self.payment_methods:
            self.selected_method_id = str(self.payment_methods[0].id)

    def _load_currencies(self):
        result = SettingsService.get_supported_currencies()
        if result.ok:
            self.supported_currencies = result.data or [USD]
        else:
            logger.error(f"Error fetching currencies: {result.error}")

    def _load_points_settings(self):
        result = SettingsService.get_settings(SystemSetting.PROMOTED_POLLS)
        if not result.ok:
            logger.error(f"Error fetching settings: {result.error}")
            return

        if result.data.get('points_to_usd_conversion'):
            self.points_per_usd = result.data['points_to_usd_conversion']

    def _load_exchange_rates(self):
        result = SettingsService.get_all_exchange_rates()
        if result.ok:
            self.rate_table = build_rate_table(result.data)
        else:
            logger.error(f"Failed to fetch exchange rates: {result.error}")

    def _load_points_balance(self):
        result = ProfileService.fetch_profile_by_id(self.user.id)
        if result.ok:
            self.points_balance = result.data.points

    # Selection

    @property
    def wallet_method(self):
        return next((m for m in self.payment_methods if m.type == PaymentMethod.TYPE_WALLET), None)

    @property
    def selected_method(self):
        return next((m for m in self.payment_methods if str(m.id) == str(self.selected_method_id)), None)

    def select_method(self, method_id):
        self.selected_method_id = str(method_id) if method_id else None
        return self.selected_method

    @property
    def wallet_selected(self):
        method = self.selected_method
        return method is not None and method.type == PaymentMethod.TYPE_WALLET

    @property
    def points_required(self):
        """Points the budget costs, from the locally loaded rates"""
        amount_usd = convert_locally(self.rate_table, self.promoted_poll.budget_amount, self.poll_currency, USD)
        return round_points(amount_usd * to_decimal(self.points_per_usd))

    @property
    def has_insufficient_points(self):
        return self.wallet_selected and self.points_balance < self.points_required

    @property
    def insufficient_points_message(self):
        if not self.has_insufficient_points:
            return None
        return (
            f"You don't have enough points for this payment. You need {self.points_required:,} points, "
            f"but you only have {self.points_balance:,} points. Please select a different payment method."
        )

    @property
    def can_submit(self):
        return (
            self.state == self.SELECTABLE
            and self.selected_method is not None
            and not self.has_insufficient_points
        )

    # Actions

    def submit(self):
        """Retry the payment with the selected method"""
        if self.state != self.SELECTABLE:
            self.notify('error', 'Payment is already in progress')
            return self

        method = self.selected_method
        if self.selected_method_id is None:
            self.notify('error', 'Please select a payment method')
            return self
        if method is None:
            self.notify('error', 'Invalid payment method')
            return self
        if method.type == PaymentMethod.TYPE_STRIPE and (not self.stripe_public_key or self.stripe_error):
            self.notify('error', self.STRIPE_UNAVAILABLE)
            return self
        if self.has_insufficient_points:
            self.notify('error', self.insufficient_points_message)
            return self

        self.state = self.PROCESSING
        try:
            result = self.promoted_poll_service.retry_promoted_poll_payment(
                self.user.id, self.promoted_poll.id, method.type
            )
            if not result.ok:
                raise ValueError(result.error)
            if not result.data:
                raise ValueError('Failed to initialize payment')

            data = result.data
            if data.get('authorization_url'):
                self.authorization_url = data['authorization_url']
                self.transaction_id = data.get('transaction_id')
                self.state = self.REDIRECT
            elif data.get('client_secret'):
                self.client_secret = data['client_secret']
                self.transaction_id = data.get('transaction_id')
                self.state = self.CARD_FORM
            else:
                self.transaction_id = data.get('transaction_id')
                self._complete('Payment processed successfully!')
        except Exception as e:
            logger.warning(f"Retry payment failed for promoted poll {self.promoted_poll.id}: {e}")
            self.notify('error', str(e) or 'Failed to retry payment')
            self.state = self.SELECTABLE

        return self

    def confirm_card_payment(self, payment_intent_id, transaction_id=None):
        """Record a card payment the client confirmed with Stripe"""
        transaction_id = transaction_id or self.transaction_id
        try:
            record = transaction_id and Transaction.objects.filter(
                pk=transaction_id, user_id=self.user.id, promoted_poll_id=self.promoted_poll.id
            ).first()
        except ValidationError:
            record = None
        if not record:
            self.notify('error', 'Transaction ID not found')
            return self

        # Only the intent created for this row can settle it
        if not payment_intent_id or payment_intent_id != record.stripe_payment_intent_id:
            logger.warning(
                f"Payment intent {payment_intent_id} does not match transaction {record.id}"
            )
            self.notify('error', 'Payment could not be verified')
            return self

        self.transaction_id = str(transaction_id)
        try:
            result = self.payment_service.update_transaction_status(
                transaction_id, Transaction.STATUS_COMPLETED, payment_intent_id
            )
            if not result.ok:
                raise ValueError(result.error)
        except Exception as e:
            self.notify('error', str(e) or 'Failed to update payment status')
            return self

        self._complete('Payment successful! Your poll promotion is pending approval.')
        return self

    def card_payment_failed(self, error):
        """The card form reported an error; the user may try again"""
        self.notify('error', f'Payment failed: {error}')
        self.client_secret = None
        self.state = self.SELECTABLE
        return self

    def close(self):
        if self.on_close:
            self.on_close()

    def _complete(self, message):
        self.state = self.COMPLETED
        self.notify('success', message)
        if self.on_success:
            self.on_success()
        self.close()

    # Presentation

    def currency_note(self, method):
        supported = (method.config or {}).get('supported_currencies')
        if not supported:
            return None
        if self.poll_currency in supported:
            return f'Supports {self.poll_currency}'
        default_currency = method.config.get('default_currency') or USD
        return f'Does not support {self.poll_currency} - payment will be converted to {default_currency}'

    def as_dict(self):
        poll = self.promoted_poll
        info = (
            'Your previous payment attempt for this campaign was not completed. '
            'Please select a payment method below to complete your payment.'
        )
        if self.poll_currency != USD:
            info += f' This payment will be processed in {self.poll_currency}.'

        stripe_warning = None
        if self.stripe_error:
            stripe_warning = (
                f'{self.stripe_error}. Credit card payments are currently unavailable, '
                'but you can still use other payment methods.'
            )

        return {
            'state': self.state,
            'info': info,
            'promoted_poll': {
                'id': str(poll.id),
                'title': poll.title,
                'budget_amount': str(poll.budget_amount),
                'currency': self.poll_currency,
                'target_votes': poll.target_votes,
                'status': poll.status,
            },
            'stripe_public_key': self.stripe_public_key,
            'stripe_warning': stripe_warning,
            'payment_methods': [
                {
                    'id': str(method.id),
                    'name': method.name,
                    'type': method.type,
                    'description': method.description,
                    'currency_note': self.currency_note(method),
                }
                for method in self.payment_methods
            ],
            'selected_method_id': self.selected_method_id,
            'supported_currencies': self.supported_currencies,
            'points_balance': self.points_balance,
            'points_required': self.points_required if self.wallet_method else None,
            'insufficient_points': self.insufficient_points_message,
            'can_submit': self.can_submit,
            'client_secret': self.client_secret,
            'transaction_id': self.transaction_id,
            'authorization_url': self.authorization_url,
            'notifications': [asdict(n) for n in self.notifications],
        }
