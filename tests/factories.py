"""
Test factories for creating test data using factory_boy.
"""
import factory
from factory.django import DjangoModelFactory
from factory import Faker, SubFactory
from decimal import Decimal
from unittest.mock import MagicMock
from django.contrib.auth import get_user_model

from apps.common.models import ExchangeRate, SystemSetting
from apps.payments.models import PaymentMethod, Transaction
from apps.promotions.models import PromotedPoll

User = get_user_model()


class UserFactory(DjangoModelFactory):
    """Factory for creating test users."""

    class Meta:
        model = User
        django_get_or_create = ('username',)

    username = factory.Sequence(lambda n: f"testuser{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    first_name = Faker('first_name')
    last_name = Faker('last_name')
    points = 0
    currency = 'USD'
    country = 'US'
    role = User.ROLE_USER
    is_active = True


class AdminUserFactory(UserFactory):
    """Factory for admin users."""
    role = User.ROLE_ADMIN


class PaymentMethodFactory(DjangoModelFactory):
    """Factory for payment methods."""

    class Meta:
        model = PaymentMethod
        django_get_or_create = ('name',)

    name = factory.Sequence(lambda n: f"Method {n}")
    type = PaymentMethod.TYPE_WALLET
    description = Faker('sentence')
    is_active = True
    config = factory.LazyFunction(dict)


class ExchangeRateFactory(DjangoModelFactory):
    """Factory for exchange rates."""

    class Meta:
        model = ExchangeRate
        django_get_or_create = ('from_currency', 'to_currency')

    from_currency = 'EUR'
    to_currency = 'USD'
    rate = Decimal('1.1')


class SystemSettingFactory(DjangoModelFactory):
    """Factory for settings documents."""

    class Meta:
        model = SystemSetting
        django_get_or_create = ('key',)

    key = SystemSetting.PROMOTED_POLLS
    value = factory.LazyFunction(lambda: {'points_to_usd_conversion': 100})


class PromotedPollFactory(DjangoModelFactory):
    """Factory for promoted polls awaiting payment."""

    class Meta:
        model = PromotedPoll

    user = SubFactory(UserFactory)
    title = Faker('sentence', nb_words=5)
    budget_amount = Decimal('50.00')
    currency = 'USD'
    target_votes = 500
    status = PromotedPoll.STATUS_PAYMENT_FAILED


class TransactionFactory(DjangoModelFactory):
    """Factory for transactions."""

    class Meta:
        model = Transaction

    user = SubFactory(UserFactory)
    amount = Decimal('10.00')
    currency = 'USD'
    original_amount = Decimal('10.00')
    original_currency = 'USD'
    payment_method = PaymentMethod.TYPE_STRIPE
    status = Transaction.STATUS_PENDING
    metadata = factory.LazyFunction(dict)


def create_standard_payment_methods():
    """Create the wallet, Stripe and Paystack methods used across tests."""
    return {
        'wallet': PaymentMethodFactory(name='Wallet', type=PaymentMethod.TYPE_WALLET, config={}),
        'stripe': PaymentMethodFactory(
            name='Credit/Debit Card',
            type=PaymentMethod.TYPE_STRIPE,
            config={'supported_currencies': ['USD', 'EUR']},
        ),
        'paystack': PaymentMethodFactory(
            name='Paystack',
            type=PaymentMethod.TYPE_PAYSTACK,
            config={'supported_currencies': ['USD', 'NGN'], 'default_currency': 'NGN'},
        ),
    }


def gateway_response(status_code=200, body=None):
    """Build a stand-in for the requests.Response of a payment function."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = body if body is not None else {}
    return response
