"""
Promotion models module.

All models are exported from this module to maintain backward compatibility.
"""
from .promoted_poll import PromotedPoll

__all__ = [
    'PromotedPoll',
]
