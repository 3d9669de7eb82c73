"""
Payment models module.

All models are exported from this module to maintain backward compatibility.
"""
from .payment_method import PaymentMethod
from .transaction import Transaction

__all__ = [
    'PaymentMethod',
    'Transaction',
]
