import uuid
from django.conf import settings
from django.db import models


class BalanceEntryType(models.TextChoices):
    """Types of balance changes."""
    DEPOSIT = 'DEPOSIT', 'Deposit (Add Funds)'
    HIRE_CHARGE = 'HIRE_CHARGE', 'Hire Charge'
    REFUND = 'REFUND', 'Refund'


class BalanceEntry(models.Model):
    """
    Balance ledger for audit trail.
    Records every change to a user's balance. Rows are never updated.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='balance_entries',
    )
    # Store hire_id as UUID field (no FK to maintain app independence)
    hire_id = models.UUIDField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Linked hire (if applicable)"
    )

    entry_type = models.CharField(
        max_length=20,
        choices=BalanceEntryType.choices
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Positive for deposits and refunds, negative for charges"
    )
    balance_after = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Balance after this entry"
    )

    description = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Balance Entry"
        verbose_name_plural = "Balance Entries"
        indexes = [
            models.Index(fields=['user', '-created_at']),
        ]

    def __str__(self):
        sign = "+" if self.amount > 0 else ""
        return f"{sign}{self.amount} ({self.entry_type})"
