"""
Common models module.

All models are exported from this module to maintain backward compatibility.
"""
from .config import SystemSetting
from .exchange_rate import ExchangeRate

__all__ = [
    'SystemSetting',
    'ExchangeRate',
]
