"""
Test configuration for the poll server.
"""
import pytest
from decimal import Decimal

from apps.payments.config import PaymentGatewayConfig


@pytest.fixture
def gateway_config():
    """Gateway configuration pointing at a test project."""
    return PaymentGatewayConfig(
        project_url='https://project.example.test',
        anon_key='test-anon-key',
        stripe_public_key='pk_test_51TestKey',
        timeout=5,
    )


@pytest.fixture
def user_factory():
    """Factory for creating test users."""
    from tests.factories import UserFactory
    return UserFactory


@pytest.fixture
def eur_to_usd():
    """EUR to USD at 1.1."""
    from tests.factories import ExchangeRateFactory
    return ExchangeRateFactory(from_currency='EUR', to_currency='USD', rate=Decimal('1.1'))
