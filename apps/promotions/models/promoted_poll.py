import uuid

from django.conf import settings
from django.db import models


class PromotedPoll(models.Model):
    """A paid campaign promoting one of the user's polls"""

    STATUS_PENDING_PAYMENT = 'pending_payment'
    STATUS_PAYMENT_FAILED = 'payment_failed'
    STATUS_PENDING_APPROVAL = 'pending_approval'
    STATUS_ACTIVE = 'active'
    STATUS_COMPLETED = 'completed'
    STATUS_REJECTED = 'rejected'

    STATUS_CHOICES = [
        (STATUS_PENDING_PAYMENT, 'Pending Payment'),
        (STATUS_PAYMENT_FAILED, 'Payment Failed'),
        (STATUS_PENDING_APPROVAL, 'Pending Approval'),
        (STATUS_ACTIVE, 'Active'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_REJECTED, 'Rejected'),
    ]

    # Statuses from which the user may pay again
    RETRYABLE_STATUSES = (STATUS_PENDING_PAYMENT, STATUS_PAYMENT_FAILED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='promoted_polls')
    title = models.CharField(max_length=255, help_text="Title of the promoted poll")
    budget_amount = models.DecimalField(max_digits=14, decimal_places=2)
    currency = models.CharField(max_length=3, default='USD')
    target_votes = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING_PAYMENT)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'promoted_polls'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status'], name='promoted_po_user_id_6f1c2a_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.status})"

    @property
    def awaiting_payment(self):
        return self.status in self.RETRYABLE_STATUSES
