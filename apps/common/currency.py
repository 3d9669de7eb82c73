"""
Money and currency helpers shared by the payment services and the retry flow.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

logger = logging.getLogger(__name__)

USD = 'USD'
NGN = 'NGN'

CENT = Decimal('0.01')


def to_decimal(value):
    """Coerce int/float/str to Decimal without binary float noise"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_amount(amount):
    """Round a money amount to cents, half up"""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def round_points(value):
    """Round a points figure to a whole number, half up"""
    return int(to_decimal(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def build_rate_table(rates):
    """
    Index exchange rate rows as {from_currency: {to_currency: rate}}.

    Accepts ExchangeRate instances or dicts with the same keys.
    """
    table = {}
    for rate in rates:
        if isinstance(rate, dict):
            from_currency, to_currency, value = rate['from_currency'], rate['to_currency'], rate['rate']
        else:
            from_currency, to_currency, value = rate.from_currency, rate.to_currency, rate.rate
        table.setdefault(from_currency, {})[to_currency] = to_decimal(value)
    return table


def convert_locally(rate_table, amount, from_currency, to_currency):
    """
    Display-only conversion from an in-memory rate table.

    Tries the direct rate, then a hop through USD. With neither available the
    amount is returned unchanged and a warning is logged, so the figure can
    disagree with PaymentService.convert_amount.
    """
    amount = to_decimal(amount)
    if from_currency == to_currency:
        return amount

    direct = rate_table.get(from_currency, {}).get(to_currency)
    if direct:
        return amount * direct

    to_usd = rate_table.get(from_currency, {}).get(USD)
    from_usd = rate_table.get(USD, {}).get(to_currency)
    if to_usd and from_usd:
        return amount * to_usd * from_usd

    logger.warning(f"No exchange rate found for {from_currency} to {to_currency}")
    return amount
