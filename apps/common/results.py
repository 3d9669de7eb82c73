"""
Service result types.

Public service operations return ``Success`` or ``Failure`` instead of raising.
Callers branch on ``result.ok``.
"""
import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    """Successful outcome carrying its payload"""
    data: Any = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed outcome carrying a user-facing error message"""
    error: str

    @property
    def ok(self) -> bool:
        return False


ServiceResult = Union[Success, Failure]


def service_result(default_error: str) -> Callable:
    """
    Turn any exception escaping a service operation into a ``Failure``.

    The exception message is used when it has one, otherwise ``default_error``.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs) -> ServiceResult:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{func.__qualname__} failed: {e}", exc_info=True)
                return Failure(str(e) or default_error)
        return wrapper
    return decorator
