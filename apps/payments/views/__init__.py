"""
Payment views module.

All views are exported from this module to maintain backward compatibility.
"""
from .payment_method_views import (
    get_payment_methods, get_available_payment_methods, get_payment_method
)
from .transaction_views import (
    get_user_transactions, get_all_transactions, update_transaction_status
)
from .gateway_views import (
    pay_with_wallet, initialize_stripe_payment, initialize_paystack_payment, convert_amount
)

__all__ = [
    'get_payment_methods',
    'get_available_payment_methods',
    'get_payment_method',
    'get_user_transactions',
    'get_all_transactions',
    'update_transaction_status',
    'pay_with_wallet',
    'initialize_stripe_payment',
    'initialize_paystack_payment',
    'convert_amount',
]
