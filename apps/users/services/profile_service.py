"""
Profile service for reading profiles and moving wallet points.
"""
import logging

from django.db import transaction
from django.db.models import F

from apps.common.results import Success, Failure, service_result
from ..models import User

logger = logging.getLogger(__name__)


class ProfileService:
    """Service for user profile operations"""

    @staticmethod
    @service_result('Failed to fetch user profile')
    def fetch_profile_by_id(user_id):
        user = User.objects.filter(pk=user_id).first()
        if user is None:
            return Failure('User profile not found')
        return Success(user)

    @staticmethod
    @service_result('Failed to update user points')
    def update_user_points(user_id, delta):
        """
        Add ``delta`` (negative to debit) to a user's points balance.

        The update is a single conditional UPDATE so concurrent debits cannot
        take the balance below zero. Returns the new balance.
        """
        delta = int(delta)
        with transaction.atomic():
            queryset = User.objects.filter(pk=user_id)
            if delta < 0:
                queryset = queryset.filter(points__gte=-delta)

            updated = queryset.update(points=F('points') + delta)
            if not updated:
                if User.objects.filter(pk=user_id).exists():
                    return Failure('Insufficient points')
                return Failure('User profile not found')

            balance = User.objects.values_list('points', flat=True).get(pk=user_id)

        logger.info(f"Points updated for user {user_id}: {delta:+d}, balance {balance}")
        return Success(balance)
