"""
Payment service for wallet payments, transactions and gateway initiation.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.common.currency import USD, NGN, to_decimal, quantize_amount, round_points
from apps.common.models import SystemSetting
from apps.common.results import Success, Failure, service_result
from apps.common.services import SettingsService
from apps.users.services import ProfileService
from ..config import PaymentGatewayConfig
from ..models import PaymentMethod, Transaction
from .gateway_client import EdgeFunctionClient

logger = logging.getLogger(__name__)


class PaymentService:
    """
    Service class for payment operations.

    Every public method returns ``Success`` or ``Failure``. The gateway
    configuration and HTTP client are injected; both default to the ones
    built from Django settings.
    """

    # Points charged per USD when the promoted_polls setting has no value
    DEFAULT_POINTS_PER_USD = 100

    def __init__(self, config=None, gateway=None):
        self.config = config or PaymentGatewayConfig.from_settings()
        self.gateway = gateway or EdgeFunctionClient(self.config)

    # Payment methods

    @service_result('Failed to get payment methods')
    def get_payment_methods(self):
        """Get all active payment methods ordered by name"""
        return Success(list(PaymentMethod.objects.filter(is_active=True).order_by('name')))

    @service_result('Failed to get payment method')
    def get_payment_method_by_id(self, method_id):
        try:
            method = PaymentMethod.objects.filter(pk=method_id, is_active=True).first()
        except (ValidationError, ValueError):
            method = None

        if method is None:
            return Failure('Payment method not found')
        return Success(method)

    @service_result('Failed to get available payment methods')
    def get_available_payment_methods(self, country_code=None, currency=None):
        """
        Get the active payment methods enabled for a country.

        When ``currency`` is given only methods supporting it are kept; see
        PaymentMethod.supports_currency.
        """
        enabled = SettingsService.get_payment_gateway_settings(country_code)
        if not enabled.ok:
            return enabled

        methods = self.get_payment_methods()
        if not methods.ok:
            return methods

        available = [method for method in methods.data if method.type in enabled.data]

        if currency:
            available = [method for method in available if method.supports_currency(currency)]

        return Success(available)

    # Wallet

    @service_result('Failed to process wallet payment')
    def process_wallet_payment(self, user_id, amount, promoted_poll_id=None, currency=USD,
                               idempotency_key=None):
        """
        Pay from the user's points balance.

        The amount is normalized to USD and charged at the configured points
        per USD. The debit and the completed transaction row are written in
        one database transaction. A user repeating a call with the same
        ``idempotency_key`` gets the transaction of their first call back.
        """
        amount = to_decimal(amount)
        if amount <= 0:
            return Failure('Amount must be greater than zero')

        if idempotency_key:
            replayed = self._replay_wallet_payment(user_id, idempotency_key, amount, currency)
            if replayed is not None:
                return replayed

        poll_settings = SettingsService.get_settings(SystemSetting.PROMOTED_POLLS)
        points_per_usd = (poll_settings.data or {}).get('points_to_usd_conversion') if poll_settings.ok else None
        points_per_usd = to_decimal(points_per_usd or self.DEFAULT_POINTS_PER_USD)

        amount_usd = amount
        if currency != USD:
            rate = SettingsService.get_exchange_rate(currency, USD)
            if not rate.ok:
                return rate
            amount_usd = amount * rate.data

        points_needed = round_points(amount_usd * points_per_usd)

        profile = ProfileService.fetch_profile_by_id(user_id)
        if not profile.ok:
            return profile

        if profile.data.points < points_needed:
            return Failure(
                f"Insufficient points. You need {points_needed} points ({profile.data.points} available)."
            )

        try:
            with transaction.atomic():
                debit = ProfileService.update_user_points(user_id, -points_needed)
                if not debit.ok:
                    if debit.error == 'Insufficient points':
                        available = ProfileService.fetch_profile_by_id(user_id)
                        balance = available.data.points if available.ok else 0
                        return Failure(
                            f"Insufficient points. You need {points_needed} points ({balance} available)."
                        )
                    return debit

                payment = Transaction.objects.create(
                    user_id=user_id,
                    promoted_poll_id=promoted_poll_id,
                    amount=quantize_amount(amount_usd),
                    currency=USD,
                    original_amount=quantize_amount(amount),
                    original_currency=currency,
                    payment_method=PaymentMethod.TYPE_WALLET,
                    status=Transaction.STATUS_COMPLETED,
                    idempotency_key=idempotency_key or None,
                    metadata={
                        'points_used': points_needed,
                        'conversion_rate': float(points_per_usd),
                        'exchange_rate': float(amount_usd / amount) if currency != USD else 1,
                    },
                )
        except IntegrityError:
            # Lost a race against a request carrying the same key
            replayed = self._replay_wallet_payment(user_id, idempotency_key, amount, currency) if idempotency_key else None
            if replayed is None:
                raise
            return replayed

        logger.info(
            f"Wallet payment {payment.id} completed for user {user_id}: "
            f"{points_needed} points for {payment.amount} USD"
        )
        return Success(payment)

    def _replay_wallet_payment(self, user_id, idempotency_key, amount, currency):
        """The earlier result for this user's key, or None when the key is new"""
        existing = Transaction.objects.filter(user_id=user_id, idempotency_key=idempotency_key).first()
        if existing is None:
            return None

        if existing.original_amount != quantize_amount(amount) or existing.original_currency != currency:
            logger.warning(f"Idempotency key {idempotency_key} reused with different payment details")
            return Failure('Idempotency key was already used for a different payment')

        logger.info(f"Wallet payment replayed for idempotency key {idempotency_key}")
        return Success(existing)

    # Transactions

    @service_result('Failed to create transaction')
    def create_transaction(self, user_id, amount, payment_method, currency=USD,
                           promoted_poll_id=None, metadata=None, status=Transaction.STATUS_PENDING):
        """
        Record a transaction.

        ``original_amount`` holds the amount in the user's preferred currency;
        when no rate to it exists the unconverted amount is kept.
        """
        profile = ProfileService.fetch_profile_by_id(user_id)
        if not profile.ok:
            return profile

        amount = to_decimal(amount)
        user_currency = profile.data.currency or USD

        original_amount = amount
        if currency != user_currency:
            rate = SettingsService.get_exchange_rate(currency, user_currency)
            if rate.ok:
                original_amount = amount * rate.data

        record = Transaction.objects.create(
            user_id=user_id,
            promoted_poll_id=promoted_poll_id,
            amount=quantize_amount(amount),
            currency=currency,
            original_amount=quantize_amount(original_amount),
            original_currency=user_currency,
            payment_method=payment_method,
            status=status,
            metadata=metadata or {},
        )

        logger.info(f"Transaction {record.id} created for user {user_id}: {record.amount} {currency} via {payment_method}")
        return Success(record)

    @service_result('Failed to update transaction status')
    def update_transaction_status(self, transaction_id, status, gateway_transaction_id=None):
        """
        Move a transaction to a terminal status.

        Rows already settled are not overwritten; an update that finds the
        row in a terminal status returns it as a success, since a webhook
        may have settled it first.
        """
        if status not in Transaction.TERMINAL_STATUSES:
            return Failure(f"Invalid transaction status: {status}")

        queryset = Transaction.objects.filter(pk=transaction_id)
        if status == Transaction.STATUS_REFUNDED:
            queryset = queryset.filter(status__in=[Transaction.STATUS_PENDING, Transaction.STATUS_COMPLETED])
        else:
            queryset = queryset.filter(status=Transaction.STATUS_PENDING)

        changes = {'status': status, 'updated_at': timezone.now()}
        if gateway_transaction_id:
            changes['gateway_transaction_id'] = gateway_transaction_id

        updated = queryset.update(**changes)

        record = Transaction.objects.filter(pk=transaction_id).first()
        if updated:
            logger.info(f"Transaction {transaction_id} marked {status}")
            return Success(record)

        if record is not None and record.is_terminal:
            logger.info(f"Transaction {transaction_id} already processed: {record.status}")
            return Success(record)

        return Failure('Transaction not found')

    @service_result('Failed to get user transactions')
    def get_user_transactions(self, user_id, limit=50, offset=0, status=None, currency=None):
        queryset = Transaction.objects.filter(user_id=user_id)
        if status:
            queryset = queryset.filter(status=status)
        if currency:
            queryset = queryset.filter(currency=currency)

        return Success(self._page(queryset, limit, offset))

    @service_result('Failed to get all transactions')
    def get_all_transactions(self, admin_id, limit=50, offset=0, status=None,
                             payment_method=None, currency=None):
        """Get every user's transactions; the caller must be an admin"""
        admin = ProfileService.fetch_profile_by_id(admin_id)
        if not admin.ok or not admin.data.is_admin:
            return Failure('Unauthorized: Only admins can view all transactions')

        queryset = Transaction.objects.all()
        if status:
            queryset = queryset.filter(status=status)
        if payment_method:
            queryset = queryset.filter(payment_method=payment_method)
        if currency:
            queryset = queryset.filter(currency=currency)

        return Success(self._page(queryset, limit, offset))

    @staticmethod
    def _page(queryset, limit, offset):
        queryset = queryset.select_related('user').order_by('-created_at')
        return {
            'transactions': list(queryset[offset:offset + limit]),
            'total_count': queryset.count(),
        }

    # Gateways

    @service_result('Failed to initialize Stripe payment')
    def initialize_stripe_payment(self, user_id, amount, promoted_poll_id=None, currency=USD):
        """
        Create a pending USD transaction and a Stripe payment intent for it.

        Returns the intent's client secret for confirming the card payment.
        """
        usd_amount = self._convert_or_keep(amount, currency, USD)

        created = self.create_transaction(
            user_id, usd_amount, PaymentMethod.TYPE_STRIPE,
            currency=USD,
            promoted_poll_id=promoted_poll_id,
            metadata={'original_amount': float(amount), 'original_currency': currency},
        )
        if not created.ok:
            return created
        record = created.data

        try:
            client_secret, payment_intent_id = self.gateway.create_payment_intent(
                usd_amount, user_id, record.id, promoted_poll_id, currency=USD
            )
            Transaction.objects.filter(pk=record.pk).update(
                stripe_payment_intent_id=payment_intent_id or '',
                metadata={**record.metadata, 'payment_intent_id': payment_intent_id},
                updated_at=timezone.now(),
            )
        except Exception as e:
            self._mark_failed(record, e, 'Failed to create payment intent')
            raise

        logger.info(f"Stripe payment intent {payment_intent_id} created for transaction {record.id}")
        return Success({'client_secret': client_secret, 'transaction_id': str(record.id)})

    @service_result('Failed to initialize Paystack payment')
    def initialize_paystack_payment(self, user_id, amount, promoted_poll_id=None, currency=USD):
        """
        Create a pending NGN transaction and a Paystack authorization for it.

        Returns the URL the user is sent to for completing the payment.
        """
        ngn_amount = self._convert_or_keep(amount, currency, NGN)

        created = self.create_transaction(
            user_id, ngn_amount, PaymentMethod.TYPE_PAYSTACK,
            currency=NGN,
            promoted_poll_id=promoted_poll_id,
            metadata={'original_amount': float(amount), 'original_currency': currency},
        )
        if not created.ok:
            return created
        record = created.data

        try:
            authorization_url, reference = self.gateway.initiate_paystack_payment(
                ngn_amount, user_id, record.id, promoted_poll_id, currency=NGN
            )
            Transaction.objects.filter(pk=record.pk).update(
                gateway_transaction_id=reference or '',
                metadata={**record.metadata, 'paystack_reference': reference},
                updated_at=timezone.now(),
            )
        except Exception as e:
            self._mark_failed(record, e, 'Failed to initialize Paystack payment')
            raise

        logger.info(f"Paystack payment {reference} initialized for transaction {record.id}")
        return Success({'authorization_url': authorization_url, 'transaction_id': str(record.id)})

    @staticmethod
    def _convert_or_keep(amount, from_currency, to_currency):
        """Convert for a gateway; a missing rate keeps the amount as is"""
        amount = to_decimal(amount)
        if from_currency == to_currency:
            return amount

        rate = SettingsService.get_exchange_rate(from_currency, to_currency)
        if not rate.ok:
            logger.warning(f"{rate.error}; charging {amount} unconverted")
            return amount
        return amount * rate.data

    @staticmethod
    def _mark_failed(record, error, default_message):
        message = str(error) or default_message
        Transaction.objects.filter(pk=record.pk).update(
            status=Transaction.STATUS_FAILED,
            metadata={**record.metadata, 'error': message},
            updated_at=timezone.now(),
        )
        logger.error(f"Gateway initiation failed for transaction {record.id}: {message}")

    # Currency

    @service_result('Failed to convert amount')
    def convert_amount(self, amount, from_currency, to_currency):
        amount = to_decimal(amount)
        if from_currency == to_currency:
            return Success(amount)

        rate = SettingsService.get_exchange_rate(from_currency, to_currency)
        if not rate.ok:
            return rate

        return Success(amount * rate.data)
