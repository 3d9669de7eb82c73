"""
Payment services module.

All services are exported from this module to maintain backward compatibility.
"""
from .gateway_client import EdgeFunctionClient, GatewayError
from .payment_service import PaymentService

__all__ = [
    'EdgeFunctionClient',
    'GatewayError',
    'PaymentService',
]
