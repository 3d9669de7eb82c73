import uuid

from django.conf import settings
from django.db import models


class Transaction(models.Model):
    """Payment record for wallet and gateway payments"""

    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'
    STATUS_FAILED = 'failed'
    STATUS_REFUNDED = 'refunded'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_FAILED, 'Failed'),
        (STATUS_REFUNDED, 'Refunded'),
    ]

    # A row in one of these has been settled and is not overwritten
    TERMINAL_STATUSES = (STATUS_COMPLETED, STATUS_FAILED, STATUS_REFUNDED)

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='transactions')
    promoted_poll = models.ForeignKey(
        'promotions.PromotedPoll', on_delete=models.SET_NULL,
        null=True, blank=True, related_name='transactions'
    )

    # Amount charged, in the currency the gateway settles in
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    currency = models.CharField(max_length=3, default='USD')
    # Amount as the user saw it
    original_amount = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    original_currency = models.CharField(max_length=3, blank=True, default='')

    payment_method = models.CharField(max_length=20, help_text="Payment method type")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)

    gateway_transaction_id = models.CharField(max_length=200, blank=True, default='')
    stripe_payment_intent_id = models.CharField(max_length=200, blank=True, default='')
    metadata = models.JSONField(default=dict, blank=True)

    idempotency_key = models.CharField(max_length=100, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'transactions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'created_at'], name='transaction_user_id_3b9e41_idx'),
            models.Index(fields=['status'], name='transaction_status_8d2f10_idx'),
            models.Index(fields=['payment_method'], name='transaction_payment_5c7a92_idx'),
            models.Index(fields=['gateway_transaction_id'], name='transaction_gateway_1e4d63_idx'),
        ]
        constraints = [
            models.UniqueConstraint(fields=['user', 'idempotency_key'], name='unique_user_idempotency_key'),
        ]

    def __str__(self):
        return f"Transaction {self.id} - {self.status}"

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES
