"""
User services module.

All services are exported from this module to maintain backward compatibility.
"""
from .profile_service import ProfileService

__all__ = [
    'ProfileService',
]
