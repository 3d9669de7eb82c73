"""
Payment serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .payment_method_serializers import PaymentMethodSerializer, AvailableMethodsQuerySerializer
from .transaction_serializers import (
    TransactionSerializer, TransactionListQuerySerializer, TransactionStatusSerializer
)
from .payment_request_serializers import (
    WalletPaymentSerializer, GatewayPaymentSerializer, ConvertAmountSerializer
)

__all__ = [
    'PaymentMethodSerializer',
    'AvailableMethodsQuerySerializer',
    'TransactionSerializer',
    'TransactionListQuerySerializer',
    'TransactionStatusSerializer',
    'WalletPaymentSerializer',
    'GatewayPaymentSerializer',
    'ConvertAmountSerializer',
]
