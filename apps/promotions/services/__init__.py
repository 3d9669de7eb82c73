"""
Promotion services module.

All services are exported from this module to maintain backward compatibility.
"""
from .promoted_poll_service import PromotedPollService
from .retry_payment_controller import RetryPaymentController, Notification

__all__ = [
    'PromotedPollService',
    'RetryPaymentController',
    'Notification',
]
