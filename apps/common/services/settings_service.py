"""
Settings service for site settings and exchange rates.
"""
import logging

from apps.common.currency import USD, to_decimal
from apps.common.results import Success, Failure, service_result
from ..models import SystemSetting, ExchangeRate

logger = logging.getLogger(__name__)


class SettingsService:
    """Read access to settings documents and exchange rates"""

    # Method types enabled when no payment_gateways setting exists
    DEFAULT_ENABLED_GATEWAYS = ['wallet', 'stripe', 'paypal', 'paystack']

    @staticmethod
    @service_result('Failed to get settings')
    def get_settings(category):
        """Get the settings document for a category, empty when unset"""
        return Success(SystemSetting.get_value(category, default={}) or {})

    @staticmethod
    @service_result('Failed to get exchange rate')
    def get_exchange_rate(from_currency, to_currency):
        """Get the rate converting from_currency into to_currency"""
        if from_currency == to_currency:
            return Success(to_decimal(1))

        rate = ExchangeRate.objects.filter(
            from_currency=from_currency,
            to_currency=to_currency
        ).values_list('rate', flat=True).first()

        if rate is None:
            return Failure(f"Exchange rate not found for {from_currency} to {to_currency}")

        return Success(rate)

    @staticmethod
    @service_result('Failed to get exchange rates')
    def get_all_exchange_rates():
        return Success(list(ExchangeRate.objects.all()))

    @staticmethod
    @service_result('Failed to get payment gateway settings')
    def get_payment_gateway_settings(country_code=None):
        """
        Get the payment method types enabled for a country.

        The payment_gateways document looks like
        {"default": ["wallet", "stripe"], "countries": {"NG": ["wallet", "paystack"]}};
        countries without an entry fall back to "default".
        """
        gateways = SystemSetting.get_value(SystemSetting.PAYMENT_GATEWAYS, default={}) or {}
        enabled = gateways.get('default', SettingsService.DEFAULT_ENABLED_GATEWAYS)

        if country_code:
            countries = gateways.get('countries', {})
            enabled = countries.get(country_code.upper(), enabled)

        return Success(list(enabled))

    @staticmethod
    @service_result('Failed to get supported currencies')
    def get_supported_currencies():
        """Currencies users may price campaigns in, USD when unconfigured"""
        currencies = SystemSetting.get_value(SystemSetting.CURRENCIES, default={}) or {}
        supported = currencies.get('supported') or [USD]
        return Success(list(supported))
